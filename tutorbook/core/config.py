from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SLOT_HOURS: list[int] = [10, 11, 12, 13, 14, 15, 16]
    SLOT_TIMEZONE: str = "UTC"
    LEAD_TIME_HOURS: int = 24
    REMINDER_WINDOW_HOURS: int = 48

    STORE_PROVIDER: str = "json"
    DATA_FILE: str = "./data/appointments.json"

    SMTP_PROVIDER: str = "gmail"
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    MAILTRAP_HOST: str = "sandbox.smtp.mailtrap.io"
    MAILTRAP_PORT: int = 587
    EMAIL_USER: str | None = None
    EMAIL_PASS: str | None = None
    EMAIL_FROM: str | None = None
    TEACHER_EMAIL: str | None = None

    ADMIN_PASSWORD: str | None = None
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    SESSION_TITLE: str = "Math Tutoring Session"
    SESSION_DESCRIPTION: str = "1-hour math tutoring session"

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}

    @property
    def approver_email(self) -> str:
        return self.TEACHER_EMAIL or self.EMAIL_USER or ""


settings = Settings()
