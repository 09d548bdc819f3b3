"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, Board (almacenamiento local), Logging.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Memo Board API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # CORS (frontend local)
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cors_allow_any: bool = False  # Permite todos los orígenes (usa con cuidado)

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "memo_board"
    mongo_tls: bool = False
    mongo_tls_insecure: bool = False  # allows invalid certs (dev only)

    # Auth / JWT
    # Sin valor por defecto: sin JWT_SECRET no se firman ni aceptan tokens
    jwt_secret: str | None = Field(
        None,
        validation_alias=AliasChoices("MEMO_JWT_SECRET", "JWT_SECRET"),
    )
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7

    # Rate limit de login por IP
    login_rate_per_min: int = 5

    # Board: almacenamiento local clave/valor de notas
    board_storage_path: str = Field(
        str(Path.home() / ".memo_board" / "storage.json"),
        validation_alias=AliasChoices("MEMO_BOARD_STORAGE", "BOARD_STORAGE_PATH"),
    )
    board_storage_key: str = "memoNotes"

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        populate_by_name=True,
    )


settings = Settings()
