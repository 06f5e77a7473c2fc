from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_TITLE: str = "PDF Page Filter"
    API_PREFIX: str = "/api"
    OUTPUT_FILENAME: str = "filtrirano.pdf"
    SNIPPET_LENGTH: int = 200

    # OCR za stranice bez tekstualnog sloja
    OCR_ENABLED: bool = False
    OCR_LANGUAGES: str = "srp+srp_latn+eng"
    OCR_DPI: int = 300

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

settings = Settings()
