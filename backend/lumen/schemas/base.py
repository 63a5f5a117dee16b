"""
Base comum dos schemas Pydantic do Lumen.

Os nomes de campo em Python são snake_case; os aliases preservam as chaves
camelCase do formato salvo (salas, livroId, nomeCompleto...) para que um
snapshot possa ir e voltar do armazenamento remoto sem perdas.
"""

from pydantic import BaseModel, ConfigDict


class LumenModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Serializa com as chaves originais (aliases), pronto para JSON."""
        return self.model_dump(by_alias=True, mode="json")
