"""
Configuração central do núcleo Lumen via variáveis de ambiente.
Carregar a partir de um arquivo .env em desenvolvimento.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Pesquisa global
    SEARCH_DEBOUNCE_MS: int = 250
    SEARCH_MIN_QUERY_LENGTH: int = 2

    # Intervalo entre marcar um item para remoção e removê-lo de fato
    REMOVAL_DELAY_MS: int = 400

    # Valores padrão das configurações do professor num armazenamento novo
    DEFAULT_TEACHER_NAME: str = "Paulo Gabriel de L. S."
    DEFAULT_SCHOOL_NAME: str = "Microcamp Mogi das Cruzes"
    DEFAULT_BONUS_VALUE: float = 3.50
    DEFAULT_MIN_STUDENTS: int = 100
    DEFAULT_HOURLY_RATE: float = 25.00

    # Calendário de feriados gerado para usuários novos
    HOLIDAYS_END_YEAR: int = 2050

    # Ambiente
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
