"""Erros do roteirizador.

Cada falha do cadastro tem um código, um título e uma mensagem curta
que a interface mostra ao usuário.
"""


class ErroRoteirizador(Exception):
    """Base de todos os erros da aplicação"""


class ConsultaCepError(ErroRoteirizador):
    """Falha ao consultar o ViaCEP (rede, timeout, CEP inexistente, resposta inválida)"""


class ErroCadastro(ErroRoteirizador):
    codigo = 'ERRO_CADASTRO'
    titulo = 'Erro'
    mensagem = 'Falha ao cadastrar o CEP.'
    http_status = 400

    def __init__(self, mensagem: str = None):
        if mensagem:
            self.mensagem = mensagem
        super().__init__(self.mensagem)

    def para_dict(self) -> dict:
        return {
            "status": "erro",
            "codigo": self.codigo,
            "titulo": self.titulo,
            "mensagem": self.mensagem
        }


class CepInvalidoError(ErroCadastro):
    codigo = 'CEP_INVALIDO'
    titulo = 'CEP inválido'
    mensagem = 'Digite um CEP com 8 dígitos (ex.: 59064320).'
    http_status = 400


class CepDuplicadoError(ErroCadastro):
    codigo = 'CEP_DUPLICADO'
    titulo = 'Duplicado'
    mensagem = 'Este CEP já está na lista.'
    http_status = 409


class FalhaConsultaEnderecoError(ErroCadastro):
    codigo = 'FALHA_CONSULTA_CEP'
    titulo = 'Erro'
    mensagem = 'Falha ao consultar o CEP.'
    http_status = 502

    def __init__(self, detalhe: str = None):
        super().__init__(f"Falha ao consultar o CEP: {detalhe}" if detalhe else None)


class EnderecoIndisponivelError(ErroCadastro):
    codigo = 'ENDERECO_INDISPONIVEL'
    titulo = 'Atenção'
    mensagem = 'Não foi possível obter o endereço deste CEP.'
    http_status = 422


class CadastroEmAndamentoError(ErroCadastro):
    codigo = 'CADASTRO_EM_ANDAMENTO'
    titulo = 'Aguarde'
    mensagem = 'Já existe um cadastro em andamento.'
    http_status = 409
