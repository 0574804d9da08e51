import logging
import threading
from typing import Callable, Iterator, List, Optional

from roteirizador.errors import CepDuplicadoError
from roteirizador.models import CepEntry

logger = logging.getLogger(__name__)

Ouvinte = Callable[[str, "ListaRota"], None]


class ListaRota:
    """
    Lista ordenada de CEPs cadastrados.

    A ordem de inserção é a ordem da rota; o usuário só a altera pelos
    movimentos de subir/descer. Nunca existem dois itens com o mesmo CEP.
    Ouvintes inscritos são avisados depois de cada alteração efetiva.
    """

    def __init__(self):
        self._itens: List[CepEntry] = []
        self._ouvintes: List[Ouvinte] = []
        self._lock = threading.RLock()

    # --- CONSULTAS ---

    def __len__(self):
        return len(self._itens)

    def __iter__(self) -> Iterator[CepEntry]:
        return iter(self.itens())

    def itens(self) -> List[CepEntry]:
        with self._lock:
            return list(self._itens)

    def buscar(self, cep: str) -> Optional[CepEntry]:
        with self._lock:
            return next((item for item in self._itens if item.cep == cep), None)

    def contem(self, cep: str) -> bool:
        return self.buscar(cep) is not None

    def indice(self, item: CepEntry) -> int:
        """Posição do item na lista, ou -1 se ausente"""
        with self._lock:
            for i, atual in enumerate(self._itens):
                if atual.cep == item.cep:
                    return i
            return -1

    def pontos_com_coordenadas(self) -> List[CepEntry]:
        """Cópia, na ordem atual, dos itens que podem ser desenhados no mapa"""
        with self._lock:
            return [item for item in self._itens if item.tem_coordenadas]

    def para_dict(self) -> List[dict]:
        return [item.para_dict() for item in self.itens()]

    # --- ALTERAÇÕES ---

    def adicionar(self, item: CepEntry) -> None:
        with self._lock:
            if self.contem(item.cep):
                raise CepDuplicadoError()
            self._itens.append(item)
        self._notificar('adicionar')

    def remover(self, item: CepEntry) -> None:
        with self._lock:
            indice = self.indice(item)
            if indice < 0:
                return
            del self._itens[indice]
        self._notificar('remover')

    def limpar(self) -> None:
        with self._lock:
            if not self._itens:
                return
            self._itens.clear()
        self._notificar('limpar')

    def mover_para_cima(self, item: CepEntry) -> None:
        with self._lock:
            indice = self.indice(item)
            if indice <= 0:
                return
            self._trocar(indice, indice - 1)
        self._notificar('mover')

    def mover_para_baixo(self, item: CepEntry) -> None:
        with self._lock:
            indice = self.indice(item)
            if indice < 0 or indice >= len(self._itens) - 1:
                return
            self._trocar(indice, indice + 1)
        self._notificar('mover')

    def _trocar(self, i: int, j: int) -> None:
        self._itens[i], self._itens[j] = self._itens[j], self._itens[i]

    # --- NOTIFICAÇÕES ---

    def inscrever(self, ouvinte: Ouvinte) -> None:
        self._ouvintes.append(ouvinte)

    def _notificar(self, acao: str) -> None:
        for ouvinte in list(self._ouvintes):
            try:
                ouvinte(acao, self)
            except Exception as e:
                logger.error(f"Erro no ouvinte da lista ({acao}): {e}")
