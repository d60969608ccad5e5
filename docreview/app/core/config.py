from pydantic_settings import BaseSettings, SettingsConfigDict
import json

class Settings(BaseSettings):
    API_PREFIX: str = ""
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    JWT_SECRET: str = "change-me-local-only"
    JWT_ALG: str = "HS256"

    # Accept X-User-Id / X-User-Role headers in place of a bearer token; local testing only
    ALLOW_HEADER_IDENTITY: bool = False

    # Seed data for the in-memory collaborators. JSON list of records.
    # Example: [{"id":"u1","username":"alice","company":"Acme"}]
    SEED_USERS_JSON: str = json.dumps([
        {"id": "admin", "username": "admin", "message": "system administrator"},
    ])
    # Example: [{"id":"d1","name":"handbook.pdf","uploader_id":"u1"}]
    SEED_PENDING_DOCS_JSON: str = "[]"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    def _load_list(self, raw: str) -> list:
        try:
            obj = json.loads(raw)
            return obj if isinstance(obj, list) else []
        except ValueError:
            return []

    def seed_users(self) -> list[dict]:
        return [u for u in self._load_list(self.SEED_USERS_JSON) if isinstance(u, dict)]

    def seed_pending_docs(self) -> list[dict]:
        return [d for d in self._load_list(self.SEED_PENDING_DOCS_JSON) if isinstance(d, dict)]

settings = Settings()
