from flask import Flask, jsonify, render_template, request, session
from flask_cors import CORS
import requests
import logging
from datetime import datetime

from roteirizador import __version__, config
from roteirizador.cadastro import CadastroCep
from roteirizador.errors import ErroCadastro
from roteirizador.services import GeocodingService, ViaCepService
from roteirizador.sessao import RegistroSessoes

# Configurar logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def avisar_secret_key_padrao(chave: str) -> bool:
    """Avisa quando os cookies de sessão estão sendo assinados com a chave pública padrão"""
    if chave == config.SECRET_KEY_PADRAO:
        logger.warning("SECRET_KEY não definida: usando a chave padrão de desenvolvimento. "
                       "Defina SECRET_KEY em produção.")
        return True
    return False


app = Flask(__name__)
app.secret_key = config.SECRET_KEY
avisar_secret_key_padrao(app.secret_key)
CORS(app, supports_credentials=True)

# Serviços compartilhados; as listas ficam em memória, uma por sessão do navegador
cadastro = CadastroCep(ViaCepService(), GeocodingService())
SESSOES = RegistroSessoes(cadastro)


def sessao_atual():
    sessao = SESSOES.obter(session.get('sessao_id'))
    session['sessao_id'] = sessao.id
    return sessao


def resposta_erro(codigo: str, titulo: str, mensagem: str, http_status: int):
    return jsonify({
        "status": "erro",
        "codigo": codigo,
        "titulo": titulo,
        "mensagem": mensagem
    }), http_status


def mapa_fechado():
    return resposta_erro("MAPA_FECHADO", "Mapa fechado", "Abra o mapa a partir da lista de CEPs.", 409)

# --- PÁGINAS ---

@app.route('/')
def index():
    """Tela de cadastro e ordenação dos CEPs"""
    sessao_atual()
    return render_template('index.html')

@app.route('/mapa')
def pagina_mapa():
    """Página com o mapa Leaflet"""
    sessao_atual()
    return render_template('mapa.html')

# --- ROTAS DA API ---

@app.route('/api')
def info():
    """Informações da API"""
    return jsonify({
        "api": "Roteirizador de CEPs",
        "versao": __version__,
        "endpoints": {
            "GET /api/ceps": "Lista atual, na ordem da rota",
            "POST /api/ceps": "Cadastrar CEP ({'cep': '59064-320'})",
            "DELETE /api/ceps/<cep>": "Apagar um CEP",
            "DELETE /api/ceps": "Limpar a lista",
            "POST /api/ceps/<cep>/subir": "Mover uma posição acima",
            "POST /api/ceps/<cep>/descer": "Mover uma posição abaixo",
            "POST /api/mapa": "Abrir o mapa com os CEPs que têm coordenadas",
            "POST /api/mapa/desenhar": "Desenhar pinos e rota",
            "POST /api/mapa/apagar": "Apagar pinos e rota",
            "POST /api/mapa/centralizar": "Ajustar o zoom aos pinos",
            "GET /health": "Status de saúde"
        },
        "servicos_utilizados": {
            "cep": "ViaCEP (gratuito)",
            "geocoding": "Nominatim/OpenStreetMap (gratuito)",
            "mapa": "Leaflet + OpenStreetMap"
        },
        "observacoes": [
            "A ordem da rota é a ordem da lista, definida manualmente",
            "A lista existe apenas enquanto o servidor estiver no ar"
        ]
    })

@app.route('/health')
def health():
    """Verificação de saúde da aplicação"""
    status = {
        "status": "online",
        "timestamp": datetime.now().isoformat(),
        "sessoes": len(SESSOES),
        "servicos": {}
    }

    # Testar ViaCEP
    try:
        r = requests.get(config.VIACEP_URL.format(cep="01310100"), timeout=2)
        status["servicos"]["viacep"] = "operacional" if r.status_code == 200 else "com problema"
    except requests.exceptions.RequestException:
        status["servicos"]["viacep"] = "inacessível"

    # Testar Nominatim
    try:
        r = requests.get(config.NOMINATIM_URL, params={'q': 'São Paulo', 'format': 'json', 'limit': 1},
                         headers={'User-Agent': config.USER_AGENT}, timeout=2)
        status["servicos"]["nominatim"] = "operacional" if r.status_code == 200 else "com problema"
    except requests.exceptions.RequestException:
        status["servicos"]["nominatim"] = "inacessível"

    return jsonify(status)

@app.route('/api/ceps', methods=['GET'])
def listar():
    return jsonify(sessao_atual().para_dict())

@app.route('/api/ceps', methods=['POST'])
def cadastrar():
    """
    Cadastra um CEP no fim da lista

    Body JSON:
    {
        "cep": "59064-320"
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    entrada = data.get('cep')
    if entrada is not None and not isinstance(entrada, str):
        entrada = str(entrada)

    sessao = sessao_atual()
    try:
        item = sessao.cadastrar(entrada or '')
    except ErroCadastro as e:
        return jsonify(e.para_dict()), e.http_status

    resultado = sessao.para_dict()
    if item is None:
        # Nada digitado: nenhuma mensagem para o usuário
        resultado["status"] = "ignorado"
        return jsonify(resultado), 200

    resultado["item"] = item.para_dict()
    return jsonify(resultado), 201

@app.route('/api/ceps/<cep>', methods=['DELETE'])
def apagar(cep):
    sessao = sessao_atual()
    item = sessao.lista.buscar(cep)
    if item is not None:
        sessao.lista.remover(item)
    return jsonify(sessao.para_dict())

@app.route('/api/ceps', methods=['DELETE'])
def limpar_lista():
    sessao = sessao_atual()
    sessao.lista.limpar()
    return jsonify(sessao.para_dict())

@app.route('/api/ceps/<cep>/subir', methods=['POST'])
def subir(cep):
    sessao = sessao_atual()
    item = sessao.lista.buscar(cep)
    if item is not None:
        sessao.lista.mover_para_cima(item)
    return jsonify(sessao.para_dict())

@app.route('/api/ceps/<cep>/descer', methods=['POST'])
def descer(cep):
    sessao = sessao_atual()
    item = sessao.lista.buscar(cep)
    if item is not None:
        sessao.lista.mover_para_baixo(item)
    return jsonify(sessao.para_dict())

# --- MAPA ---

@app.route('/api/mapa', methods=['POST'])
def abrir_mapa():
    sessao = sessao_atual()
    pontos = sessao.abrir_mapa()
    if not pontos:
        return resposta_erro("SEM_COORDENADAS", "Sem coordenadas",
                             "Cadastre ao menos um CEP com coordenadas válidas.", 400)
    return jsonify({
        "status": "sucesso",
        "pontos": [p.para_dict() for p in pontos]
    })

@app.route('/api/mapa/pronto', methods=['POST'])
def mapa_pronto():
    sessao = sessao_atual()
    if sessao.mapa is None:
        return mapa_fechado()
    sessao.mapa.marcar_pronto()
    return jsonify({"status": "sucesso", "pontos": [p.para_dict() for p in sessao.pontos_mapa]})

@app.route('/api/mapa/localizacao', methods=['POST'])
def localizacao():
    """
    Localização do dispositivo informada pelo navegador

    Body JSON: {"lat": -5.8, "lon": -35.2} ou {"erro": "permissão negada"}
    """
    sessao = sessao_atual()
    if sessao.mapa is None:
        return mapa_fechado()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    if 'erro' in data or 'lat' not in data or 'lon' not in data:
        sessao.localizacao_navegador.negar(str(data.get('erro', '')))
    else:
        sessao.localizacao_navegador.registrar(data.get('lat'), data.get('lon'))

    posicao = sessao.atualizar_inicio()
    return jsonify({
        "status": "sucesso",
        "inicio": {"lat": posicao[0], "lon": posicao[1]} if posicao else None
    })

@app.route('/api/mapa/desenhar', methods=['POST'])
def desenhar():
    sessao = sessao_atual()
    if sessao.mapa is None:
        return mapa_fechado()
    sessao.mapa.desenhar(sessao.pontos_mapa)
    return jsonify({"status": "sucesso"})

@app.route('/api/mapa/apagar', methods=['POST'])
def apagar_mapa():
    sessao = sessao_atual()
    if sessao.mapa is None:
        return mapa_fechado()
    sessao.mapa.apagar()
    return jsonify({"status": "sucesso"})

@app.route('/api/mapa/centralizar', methods=['POST'])
def centralizar():
    sessao = sessao_atual()
    if sessao.mapa is None:
        return mapa_fechado()
    sessao.mapa.centralizar()
    return jsonify({"status": "sucesso"})

@app.route('/api/mapa/comandos', methods=['GET'])
def comandos():
    sessao = sessao_atual()
    if sessao.mapa is None:
        return mapa_fechado()
    return jsonify({"status": "sucesso", "comandos": sessao.mapa.consumir_comandos()})

@app.errorhandler(404)
def not_found(error):
    return resposta_erro("ENDPOINT_NAO_ENCONTRADO", "Não encontrado",
                         "Endpoint não encontrado. Consulte /api para ver endpoints disponíveis", 404)

@app.errorhandler(500)
def internal_error(error):
    logger.error(f"Erro interno: {error}")
    return resposta_erro("ERRO_INTERNO", "Erro", "Erro interno do servidor", 500)

if __name__ == '__main__':
    logger.info(f"Iniciando servidor na porta {config.PORT}")
    app.run(host='0.0.0.0', port=config.PORT, debug=False, threaded=True)
