import logging
import threading
from collections import deque
from typing import Iterable, List

from roteirizador import config
from roteirizador.models import CepEntry

logger = logging.getLogger(__name__)


class ApresentacaoMapa:
    """
    Fila de comandos para a página do mapa (Leaflet).

    O servidor não executa JavaScript: cada comando vira um registro
    {"funcao", "args"} que a página busca e executa na ordem em que foi
    enfileirado. A página avisa uma única vez quando terminou de carregar;
    comandos emitidos antes disso aguardam até `espera_maxima` segundos e
    depois são enfileirados assim mesmo.
    """

    def __init__(self, espera_maxima: float = config.ESPERA_MAPA_SEGUNDOS):
        self.espera_maxima = espera_maxima
        self._pronto = threading.Event()
        self._comandos = deque()
        self._lock = threading.Lock()

    @property
    def pronto(self) -> bool:
        return self._pronto.is_set()

    def marcar_pronto(self) -> None:
        if not self.pronto:
            logger.info("Página do mapa pronta")
        self._pronto.set()

    def aguardar_pronto(self) -> bool:
        return self._pronto.wait(self.espera_maxima)

    def desenhar(self, pontos: Iterable[CepEntry]) -> None:
        """Pinos e rota, na ordem recebida"""
        payload = [
            {"lat": p.latitude, "lon": p.longitude, "label": p.rotulo}
            for p in pontos if p.tem_coordenadas
        ]
        self._enviar('plotPointsAndRoute', payload)

    def definir_inicio(self, lat: float, lon: float) -> None:
        """Centraliza no dispositivo e marca o pino "Início" """
        self._enviar('setStart', float(lat), float(lon))

    def apagar(self) -> None:
        self._enviar('clearRoutesAndMarkers')

    def centralizar(self) -> None:
        self._enviar('fitToData')

    def consumir_comandos(self) -> List[dict]:
        with self._lock:
            comandos = list(self._comandos)
            self._comandos.clear()
        return comandos

    def _enviar(self, funcao: str, *args) -> None:
        if not self.aguardar_pronto():
            logger.warning(f"Mapa não sinalizou prontidão em {self.espera_maxima}s; enviando '{funcao}' assim mesmo")
        with self._lock:
            self._comandos.append({"funcao": funcao, "args": list(args)})
