from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_URL: str = "https://api.meteomatics.com"
    API_USER: str = ""
    API_PASSWORD: str = ""

    # Timeout de cada request HTTP en segundos
    REQUEST_TIMEOUT: int = 300

    # Tope para cualquier contador leído del buffer (fechas, parámetros,
    # coordenadas, puntos de grilla) antes de usarlo para iterar
    MAX_WIRE_COUNT: int = 50_000_000

    class Config:
        env_file = ".env"
        env_prefix = "METEOMATICS_"

settings = Settings()
