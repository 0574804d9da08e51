import os

# --- SERVIDOR ---
PORT = int(os.getenv('PORT', 7777))
SECRET_KEY_PADRAO = 'roteirizador-dev'
SECRET_KEY = os.getenv('SECRET_KEY', SECRET_KEY_PADRAO)
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# --- SESSÕES ---
# Sessões sem acesso por mais que este tempo são descartadas
SESSAO_TTL_SEGUNDOS = float(os.getenv('ROTEIRIZADOR_SESSAO_TTL', 2 * 60 * 60))
MAX_SESSOES = int(os.getenv('ROTEIRIZADOR_MAX_SESSOES', 1000))

# --- SERVIÇOS EXTERNOS ---
VIACEP_URL = os.getenv('VIACEP_URL', 'https://viacep.com.br/ws/{cep}/json/')
NOMINATIM_URL = os.getenv('NOMINATIM_URL', 'https://nominatim.openstreetmap.org/search')
# Nominatim exige um User-Agent identificando a aplicação
USER_AGENT = os.getenv('ROTEIRIZADOR_USER_AGENT', 'Roteirizador/1.0 (+https://example.com)')
TIMEOUT_SEGUNDOS = float(os.getenv('ROTEIRIZADOR_TIMEOUT', 15))

# --- MAPA ---
# Tempo máximo aguardando a página do mapa sinalizar que está pronta
ESPERA_MAPA_SEGUNDOS = float(os.getenv('ROTEIRIZADOR_ESPERA_MAPA', 6))
# Ponto de início fixo opcional, no formato "lat,lon"
INICIO_FIXO = os.getenv('ROTEIRIZADOR_INICIO', '')
