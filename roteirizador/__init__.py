"""Roteirizador de CEPs: cadastro, ordenação manual e visualização em mapa."""

__version__ = "1.0.0"
