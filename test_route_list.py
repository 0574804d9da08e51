import pytest

from roteirizador.errors import CepDuplicadoError
from roteirizador.models import CepEntry
from roteirizador.route_list import ListaRota


def item(cep, coords=True):
    if coords:
        return CepEntry(cep=cep, endereco=f"Rua {cep}", latitude=-5.0, longitude=-35.0)
    return CepEntry(cep=cep, endereco=f"Rua {cep}")


def ceps(lista):
    return [i.cep for i in lista]


@pytest.fixture
def lista():
    lista = ListaRota()
    for cep in ("11111111", "22222222", "33333333", "44444444"):
        lista.adicionar(item(cep))
    return lista


def test_adicionar_no_fim(lista):
    lista.adicionar(item("55555555"))
    assert ceps(lista) == ["11111111", "22222222", "33333333", "44444444", "55555555"]


def test_adicionar_recusa_cep_repetido(lista):
    with pytest.raises(CepDuplicadoError):
        lista.adicionar(CepEntry(cep="22222222", endereco="Outro endereço"))
    assert len(lista) == 4


def test_remover(lista):
    lista.remover(lista.buscar("22222222"))
    assert ceps(lista) == ["11111111", "33333333", "44444444"]


def test_remover_item_ausente_nao_altera(lista):
    lista.remover(item("99999999"))
    assert len(lista) == 4


def test_limpar(lista):
    lista.limpar()
    assert len(lista) == 0
    assert lista.itens() == []


def test_mover_para_cima_troca_com_anterior(lista):
    lista.mover_para_cima(lista.buscar("33333333"))
    assert ceps(lista) == ["11111111", "33333333", "22222222", "44444444"]


def test_mover_para_baixo_troca_com_seguinte(lista):
    lista.mover_para_baixo(lista.buscar("22222222"))
    assert ceps(lista) == ["11111111", "33333333", "22222222", "44444444"]


def test_mover_nos_limites_nao_altera(lista):
    original = ceps(lista)
    lista.mover_para_cima(lista.buscar("11111111"))
    lista.mover_para_baixo(lista.buscar("44444444"))
    assert ceps(lista) == original


def test_mover_item_ausente_nao_altera(lista):
    original = ceps(lista)
    lista.mover_para_cima(item("99999999"))
    lista.mover_para_baixo(item("99999999"))
    assert ceps(lista) == original


def test_pontos_com_coordenadas_mantem_ordem():
    lista = ListaRota()
    lista.adicionar(item("11111111"))
    lista.adicionar(item("22222222", coords=False))
    lista.adicionar(item("33333333"))
    lista.adicionar(item("44444444", coords=False))
    lista.adicionar(item("55555555"))

    pontos = lista.pontos_com_coordenadas()

    assert ceps(pontos) == ["11111111", "33333333", "55555555"]
    pontos.clear()
    assert len(lista) == 5


def test_pontos_com_coordenadas_vazio():
    lista = ListaRota()
    lista.adicionar(item("11111111", coords=False))
    assert lista.pontos_com_coordenadas() == []


def test_ouvintes_avisados_apenas_em_alteracoes(lista):
    acoes = []
    lista.inscrever(lambda acao, l: acoes.append((acao, len(l))))

    lista.adicionar(item("55555555"))
    lista.mover_para_cima(lista.buscar("11111111"))  # já está no topo
    lista.mover_para_baixo(lista.buscar("11111111"))
    lista.remover(item("99999999"))
    lista.remover(lista.buscar("55555555"))
    lista.limpar()
    lista.limpar()

    assert acoes == [("adicionar", 5), ("mover", 5), ("remover", 4), ("limpar", 0)]


def test_erro_no_ouvinte_nao_impede_alteracao(lista):
    def ouvinte_com_erro(acao, l):
        raise RuntimeError("falhou")

    lista.inscrever(ouvinte_com_erro)
    lista.adicionar(item("55555555"))
    assert lista.contem("55555555")


def test_str_do_item():
    assert str(item("59064320", coords=False)) == "59064320 - Rua 59064320"
    com_coords = CepEntry(cep="59064320", endereco="Natal", latitude=-5.8205, longitude=-35.2091)
    assert str(com_coords) == "59064320 - Natal (-5.820500, -35.209100)"
    assert com_coords.coordenadas == (-5.8205, -35.2091)
    assert com_coords.cep_formatado == "59064-320"
