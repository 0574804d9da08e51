import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, List, Optional

from roteirizador import config
from roteirizador.cadastro import CadastroCep
from roteirizador.errors import CadastroEmAndamentoError
from roteirizador.localizacao import (
    LocalizacaoComReserva,
    LocalizacaoFixa,
    LocalizacaoNavegador,
    Posicao,
)
from roteirizador.mapa import ApresentacaoMapa
from roteirizador.models import CepEntry
from roteirizador.route_list import ListaRota

logger = logging.getLogger(__name__)


class SessaoRota:
    """Estado de um usuário: a lista de CEPs e o mapa aberto, apenas em memória"""

    def __init__(self, cadastro: CadastroCep, sessao_id: str = None,
                 espera_mapa: float = config.ESPERA_MAPA_SEGUNDOS, inicio_fixo: str = config.INICIO_FIXO):
        self.id = sessao_id or uuid.uuid4().hex
        self.cadastro = cadastro
        self.lista = ListaRota()
        self.versao = 0
        self._lock_versao = threading.Lock()
        self.ultimo_acesso = 0.0
        self.lista.inscrever(self._ao_alterar_lista)

        self.espera_mapa = espera_mapa
        self.mapa: Optional[ApresentacaoMapa] = None
        self.pontos_mapa: List[CepEntry] = []
        self.localizacao_navegador = LocalizacaoNavegador()
        self.localizacao = LocalizacaoComReserva(self.localizacao_navegador, LocalizacaoFixa(inicio_fixo))

        self._lock_cadastro = threading.Lock()

    def _ao_alterar_lista(self, acao: str, lista: ListaRota) -> None:
        with self._lock_versao:
            self.versao += 1
        logger.debug(f"Sessão {self.id}: lista alterada ({acao}), {len(lista)} itens")

    def cadastrar(self, entrada: str) -> Optional[CepEntry]:
        # Um cadastro por vez: o segundo pedido é recusado em vez de intercalado
        if not self._lock_cadastro.acquire(blocking=False):
            raise CadastroEmAndamentoError()
        try:
            return self.cadastro.cadastrar(entrada, self.lista)
        finally:
            self._lock_cadastro.release()

    def abrir_mapa(self) -> List[CepEntry]:
        """
        Abre um novo mapa com a cópia atual dos pontos com coordenadas.
        Lista vazia significa que não há nada para mostrar e o mapa não é aberto.
        """
        pontos = self.lista.pontos_com_coordenadas()
        if not pontos:
            return []
        self.pontos_mapa = pontos
        self.mapa = ApresentacaoMapa(espera_maxima=self.espera_mapa)
        logger.info(f"Sessão {self.id}: mapa aberto com {len(pontos)} pontos")
        return pontos

    def atualizar_inicio(self) -> Optional[Posicao]:
        """Marca o pino "Início" se houver localização do dispositivo"""
        posicao = self.localizacao.obter_localizacao_atual()
        if posicao is not None and self.mapa is not None:
            self.mapa.definir_inicio(*posicao)
        return posicao

    def para_dict(self) -> dict:
        return {
            "status": "sucesso",
            "itens": self.lista.para_dict(),
            "total": len(self.lista),
            "com_coordenadas": len(self.lista.pontos_com_coordenadas()),
            "versao": self.versao
        }


class RegistroSessoes:
    """
    Sessões ativas do processo, indexadas pelo id guardado no cookie.

    Sessões sem acesso há mais de `ttl` segundos são descartadas, e acima de
    `maximo` sessões as menos usadas recentemente saem primeiro.
    """

    def __init__(self, cadastro: CadastroCep, ttl: float = config.SESSAO_TTL_SEGUNDOS,
                 maximo: int = config.MAX_SESSOES, relogio: Callable[[], float] = time.monotonic):
        self.cadastro = cadastro
        self.ttl = ttl
        self.maximo = maximo
        self._relogio = relogio
        # Ordem = do acesso mais antigo para o mais recente
        self._sessoes: "OrderedDict[str, SessaoRota]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._sessoes)

    def obter(self, sessao_id: str = None) -> SessaoRota:
        with self._lock:
            agora = self._relogio()
            self._expirar(agora)

            sessao = self._sessoes.get(sessao_id) if sessao_id else None
            if sessao is None:
                sessao = SessaoRota(self.cadastro, sessao_id)
                self._sessoes[sessao.id] = sessao
                logger.info(f"Nova sessão {sessao.id}")
            else:
                self._sessoes.move_to_end(sessao.id)
            sessao.ultimo_acesso = agora

            while len(self._sessoes) > self.maximo:
                antiga_id, _ = self._sessoes.popitem(last=False)
                logger.info(f"Sessão {antiga_id} descartada (limite de {self.maximo} sessões)")
            return sessao

    def _expirar(self, agora: float) -> None:
        while self._sessoes:
            sessao = next(iter(self._sessoes.values()))
            if agora - sessao.ultimo_acesso <= self.ttl:
                break
            del self._sessoes[sessao.id]
            logger.info(f"Sessão {sessao.id} expirada")

    def limpar(self) -> None:
        with self._lock:
            self._sessoes.clear()
