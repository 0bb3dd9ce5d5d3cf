from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "site-cms"
    environment: str = "local"
    debug: bool = True
    log_level: str = "INFO"
    client_url: str = "http://localhost:3000"

    mongo_port: int = 27017
    mongo_host: str = "localhost"
    mongo_db: str = "site_cms"
    mongo_password: str | None = None
    mongo_params: str | None = None
    mongo_user: str | None = None
    mongo_srv: bool = False

    jwt_algorithm: str = "HS256"
    jwt_secret_key: str = "very-secret-key"
    jwt_expire: str = "7d"
    session_cookie_name: str = "token"
    bcrypt_rounds: int = 10

    user_id_digits: int = 2
    user_id_max_attempts: int = 1000

    admin_default_user_id: str = "ADM01"
    admin_default_name: str = "Master Admin"
    admin_default_email: str = "admin@localhost.com"
    admin_default_phone: str = "9999999999"
    admin_default_password: str = "changeme"

    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_folder: str = "uploads"
    upload_max_bytes: int = 5 * 1024 * 1024
    upload_max_files: int = 10

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=True, frozen=True)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def mongo_uri(self) -> str:
        auth = ""
        if self.mongo_user and self.mongo_password:
            auth = f"{self.mongo_user}:{self.mongo_password}@"
        if self.mongo_srv:
            params = self.mongo_params or "retryWrites=true&w=majority"
            return f"mongodb+srv://{auth}{self.mongo_host}/{self.mongo_db}?{params}"
        params = f"?{self.mongo_params}" if self.mongo_params else ""
        return f"mongodb://{auth}{self.mongo_host}:{self.mongo_port}/{self.mongo_db}{params}"


settings = Settings()
