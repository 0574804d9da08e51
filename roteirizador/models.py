from dataclasses import dataclass
from typing import Optional, Tuple

from roteirizador.cep import formatar_cep

ENDERECO_NAO_ENCONTRADO = "(address not found)"


@dataclass(frozen=True)
class CepEntry:
    """Um CEP cadastrado com o endereço resolvido e coordenadas opcionais"""
    cep: str
    endereco: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def tem_coordenadas(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def coordenadas(self) -> Optional[Tuple[float, float]]:
        if not self.tem_coordenadas:
            return None
        return self.latitude, self.longitude

    @property
    def rotulo(self) -> str:
        """Texto do pino no mapa"""
        return f"{self.cep} - {self.endereco}"

    @property
    def cep_formatado(self) -> str:
        return formatar_cep(self.cep)

    def para_dict(self) -> dict:
        return {
            "cep": self.cep,
            "cep_formatado": self.cep_formatado,
            "endereco": self.endereco,
            "coordenadas": {
                "lat": self.latitude,
                "lon": self.longitude
            } if self.tem_coordenadas else None,
            "descricao": str(self)
        }

    def __str__(self):
        texto = self.rotulo
        if self.tem_coordenadas:
            texto += f" ({self.latitude:.6f}, {self.longitude:.6f})"
        return texto
