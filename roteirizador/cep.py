"""Limpeza e validação de CEPs brasileiros."""

TAMANHO_CEP = 8
_DIGITOS = frozenset('0123456789')


def limpar_cep(cep: str) -> str:
    """Remove caracteres não numéricos do CEP, mantendo a ordem dos dígitos"""
    if not cep:
        return ''
    # str.isdigit aceita dígitos de outros alfabetos; aqui só 0-9 contam
    return ''.join(c for c in cep if c in _DIGITOS)


def cep_valido(cep: str) -> bool:
    """Um CEP válido tem exatamente 8 dígitos (0-9)"""
    return len(cep) == TAMANHO_CEP and all(c in _DIGITOS for c in cep)


def formatar_cep(cep: str) -> str:
    """Formata CEP para o padrão XXXXX-XXX"""
    cep_limpo = limpar_cep(cep)
    if len(cep_limpo) == TAMANHO_CEP:
        return f"{cep_limpo[:5]}-{cep_limpo[5:]}"
    return cep
