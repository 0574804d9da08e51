"""
Localização do dispositivo, usada para o pino "Início" do mapa.

Nenhum provedor levanta exceção: permissão negada ou qualquer erro
resultam em None, e o mapa segue sem ponto inicial.
"""
import logging
import math
import threading
from abc import ABC, abstractmethod
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

Posicao = Tuple[float, float]


def _posicao_valida(lat, lon) -> Optional[Posicao]:
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon


class ProvedorLocalizacao(ABC):
    @abstractmethod
    def obter_localizacao_atual(self) -> Optional[Posicao]:
        ...


class LocalizacaoNavegador(ProvedorLocalizacao):
    """Última posição informada pela Geolocation API do navegador"""

    def __init__(self):
        self._posicao: Optional[Posicao] = None
        self._lock = threading.Lock()

    def registrar(self, lat, lon) -> Optional[Posicao]:
        posicao = _posicao_valida(lat, lon)
        if posicao is None:
            logger.warning(f"Localização inválida recebida do navegador: {lat}, {lon}")
        with self._lock:
            self._posicao = posicao
        return posicao

    def negar(self, motivo: str = '') -> None:
        logger.info(f"Localização indisponível no navegador: {motivo or 'permissão negada'}")
        with self._lock:
            self._posicao = None

    def obter_localizacao_atual(self) -> Optional[Posicao]:
        with self._lock:
            return self._posicao


class LocalizacaoFixa(ProvedorLocalizacao):
    """Ponto de início configurado como "lat,lon" (ROTEIRIZADOR_INICIO)"""

    def __init__(self, valor: str):
        self._posicao = None
        if valor:
            partes = valor.split(',')
            if len(partes) == 2:
                self._posicao = _posicao_valida(partes[0].strip(), partes[1].strip())
            if self._posicao is None:
                logger.warning(f"ROTEIRIZADOR_INICIO inválido: '{valor}'")

    def obter_localizacao_atual(self) -> Optional[Posicao]:
        return self._posicao


class LocalizacaoComReserva(ProvedorLocalizacao):
    """Usa o primeiro provedor que tiver uma posição"""

    def __init__(self, *provedores: ProvedorLocalizacao):
        self.provedores = provedores

    def obter_localizacao_atual(self) -> Optional[Posicao]:
        for provedor in self.provedores:
            try:
                posicao = provedor.obter_localizacao_atual()
            except Exception as e:
                logger.warning(f"Erro ao obter localização de {provedor.__class__.__name__}: {e}")
                continue
            if posicao is not None:
                return posicao
        return None
