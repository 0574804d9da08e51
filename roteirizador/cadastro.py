import logging
from typing import Optional

from roteirizador.cep import cep_valido, limpar_cep
from roteirizador.errors import (
    CepDuplicadoError,
    CepInvalidoError,
    ConsultaCepError,
    EnderecoIndisponivelError,
    FalhaConsultaEnderecoError,
)
from roteirizador.models import ENDERECO_NAO_ENCONTRADO, CepEntry
from roteirizador.route_list import ListaRota
from roteirizador.services import GeocodingService, ViaCepService

logger = logging.getLogger(__name__)


class CadastroCep:
    """
    Cadastro de um CEP digitado pelo usuário.

    Etapas, cada uma interrompendo o cadastro em caso de falha:
      1. Limpeza (entrada vazia é ignorada, sem erro)
      2. Validação dos 8 dígitos
      3. Verificação de duplicidade na lista
      4. Endereço via ViaCEP
      5. Coordenadas via Nominatim (falha aqui não impede o cadastro)
      6. Inclusão no fim da lista
    """

    def __init__(self, via_cep: ViaCepService, geocoding: GeocodingService):
        self.via_cep = via_cep
        self.geocoding = geocoding

    def cadastrar(self, entrada: str, lista: ListaRota) -> Optional[CepEntry]:
        """
        Retorna o item incluído, ou None quando não havia nada digitado.
        Levanta uma subclasse de ErroCadastro nas demais falhas; nesse caso
        a lista não é alterada.
        """
        cep = limpar_cep(entrada)
        if not cep:
            return None

        if not cep_valido(cep):
            logger.info(f"CEP com tamanho inválido: '{entrada}'")
            raise CepInvalidoError()

        if lista.contem(cep):
            logger.info(f"CEP {cep} já está na lista")
            raise CepDuplicadoError()

        try:
            endereco = self.via_cep.obter_endereco(cep)
        except ConsultaCepError as e:
            logger.warning(f"Falha ao consultar o CEP {cep}: {e}")
            raise FalhaConsultaEnderecoError(str(e)) from e

        if not endereco or not endereco.strip():
            endereco = ENDERECO_NAO_ENCONTRADO
        if not endereco.strip():
            raise EnderecoIndisponivelError()

        coordenadas = self.geocoding.geocodificar(f"{endereco}, Brasil")
        if coordenadas is None:
            logger.warning(f"CEP {cep} cadastrado sem coordenadas")

        item = CepEntry(
            cep=cep,
            endereco=endereco,
            latitude=coordenadas[0] if coordenadas else None,
            longitude=coordenadas[1] if coordenadas else None
        )
        lista.adicionar(item)
        logger.info(f"CEP {cep} cadastrado: {item}")
        return item
