import logging
import math
from typing import Optional, Tuple

import requests

from roteirizador import config
from roteirizador.cep import TAMANHO_CEP, limpar_cep
from roteirizador.errors import ConsultaCepError

logger = logging.getLogger(__name__)

# Campos do ViaCEP que compõem o endereço, na ordem de exibição
CAMPOS_ENDERECO = ('logradouro', 'bairro', 'localidade', 'uf')


class ViaCepService:
    """Consulta o endereço de um CEP na API pública do ViaCEP"""

    def __init__(self, session: requests.Session = None, url: str = config.VIACEP_URL,
                 timeout: float = config.TIMEOUT_SEGUNDOS):
        self._http = session or requests.Session()
        self.url = url
        self.timeout = timeout

    def obter_endereco(self, cep: str) -> str:
        """
        Retorna "logradouro, bairro, cidade, UF" omitindo as partes vazias.
        Levanta ConsultaCepError em qualquer falha da consulta.
        """
        cep_limpo = limpar_cep(cep)
        if len(cep_limpo) != TAMANHO_CEP:
            raise ConsultaCepError(f"CEP inválido: {cep}")

        logger.info(f"Buscando CEP {cep_limpo} no ViaCEP...")
        try:
            response = self._http.get(self.url.format(cep=cep_limpo), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Erro de rede no ViaCEP para {cep_limpo}: {e}")
            raise ConsultaCepError(f"serviço indisponível ({e.__class__.__name__})") from e

        if response.status_code != 200:
            raise ConsultaCepError(f"CEP não encontrado: {cep_limpo}")

        try:
            dados_cep = response.json()
        except ValueError as e:
            raise ConsultaCepError("resposta inválida do ViaCEP") from e

        if not isinstance(dados_cep, dict):
            raise ConsultaCepError("resposta inválida do ViaCEP")
        if dados_cep.get('erro') in (True, 'true'):
            raise ConsultaCepError(f"CEP não encontrado: {cep_limpo}")

        partes = []
        for campo in CAMPOS_ENDERECO:
            valor = dados_cep.get(campo)
            if isinstance(valor, str) and valor.strip():
                partes.append(valor.strip())
        return ", ".join(partes)


class GeocodingService:
    """Converte endereços em coordenadas usando o Nominatim (OpenStreetMap)"""

    def __init__(self, session: requests.Session = None, url: str = config.NOMINATIM_URL,
                 timeout: float = config.TIMEOUT_SEGUNDOS, user_agent: str = config.USER_AGENT):
        self._http = session or requests.Session()
        self._http.headers['User-Agent'] = user_agent
        self.url = url
        self.timeout = timeout

    def geocodificar(self, consulta: str) -> Optional[Tuple[float, float]]:
        """
        Retorna (lat, lon) do primeiro resultado no Brasil, ou None.
        Falhas de rede ou respostas sem resultado nunca levantam exceção.
        """
        if not consulta or not consulta.strip():
            return None

        params = {
            'format': 'json',
            'q': consulta,
            'limit': 1,
            'countrycodes': 'br'
        }
        logger.info(f"Buscando coordenadas para: {consulta}")
        try:
            response = self._http.get(self.url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Erro de rede no Nominatim: {e}")
            return None

        if response.status_code != 200:
            logger.warning(f"Nominatim respondeu {response.status_code} para '{consulta}'")
            return None

        try:
            resultados = response.json()
        except ValueError:
            logger.warning("Resposta inválida do Nominatim")
            return None

        if not isinstance(resultados, list) or not resultados or not isinstance(resultados[0], dict):
            logger.info(f"Nenhuma coordenada encontrada para '{consulta}'")
            return None

        primeiro = resultados[0]
        lat = _converter_coordenada(primeiro.get('lat'))
        lon = _converter_coordenada(primeiro.get('lon'))
        if lat is None or lon is None:
            return None

        logger.info(f"Coordenadas encontradas via Nominatim: {lat}, {lon}")
        return lat, lon


def _converter_coordenada(valor) -> Optional[float]:
    # float() ignora a localidade do sistema: o separador decimal é sempre "."
    if valor is None or (isinstance(valor, str) and not valor.strip()):
        return None
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numero):
        return None
    return numero
