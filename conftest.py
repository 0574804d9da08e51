import pytest

from roteirizador.errors import ConsultaCepError

# Endereços conhecidos usados nos testes (formato devolvido pelo ViaCepService)
ENDERECOS = {
    "59064320": "Rua Doutor Horácio Dantas, Nova Descoberta, Natal, RN",
    "01310100": "Avenida Paulista, Bela Vista, São Paulo, SP",
    "17500005": "Rua Nove de Julho, Centro, Marília, SP",
    "17120000": "Agudos, SP",
    "18600000": "",
}

COORDENADAS = {
    "Rua Doutor Horácio Dantas, Nova Descoberta, Natal, RN, Brasil": (-5.8205, -35.2091),
    "Avenida Paulista, Bela Vista, São Paulo, SP, Brasil": (-23.5614, -46.6558),
    "Agudos, SP, Brasil": (-22.4694, -48.9863),
}


class ViaCepFalso:
    def __init__(self, enderecos=None):
        self.enderecos = dict(ENDERECOS if enderecos is None else enderecos)
        self.chamadas = []

    def obter_endereco(self, cep):
        self.chamadas.append(cep)
        if cep not in self.enderecos:
            raise ConsultaCepError(f"CEP não encontrado: {cep}")
        return self.enderecos[cep]


class GeocodingFalso:
    def __init__(self, coordenadas=None):
        self.coordenadas = dict(COORDENADAS if coordenadas is None else coordenadas)
        self.consultas = []

    def geocodificar(self, consulta):
        self.consultas.append(consulta)
        return self.coordenadas.get(consulta)


@pytest.fixture
def via_cep():
    return ViaCepFalso()


@pytest.fixture
def geocoding():
    return GeocodingFalso()


@pytest.fixture
def cliente(via_cep, geocoding, monkeypatch):
    """Cliente de teste do Flask com os serviços externos substituídos"""
    import app as servidor

    monkeypatch.setattr(servidor.cadastro, 'via_cep', via_cep)
    monkeypatch.setattr(servidor.cadastro, 'geocoding', geocoding)
    servidor.app.config['TESTING'] = True
    servidor.SESSOES.limpar()
    with servidor.app.test_client() as c:
        yield c
    servidor.SESSOES.limpar()
