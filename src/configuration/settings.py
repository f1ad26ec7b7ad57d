import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    app_env = os.getenv("APP_ENV", "local")
    # 프로젝트 루트 디렉토리 찾기 (src/configuration/settings.py -> ../../)
    project_root = Path(__file__).parent.parent.parent
    env_file = project_root / f".env.{app_env}"
    load_dotenv(env_file)


@dataclass(frozen=True)
class Settings:
    app_env: str
    server_name: str
    jira_base_url: str
    user_id: str
    user_password: str
    jira_timeout: float  # 초 단위
    field_mapping_path: str  # jira.fields 후보 매핑 YAML (없으면 빈 문자열)


def build_settings() -> Settings:
    _load_env()

    required_vars = ("APP_ENV", "SERVER_NAME", "JIRA_BASE_URL", "USER_ID", "USER_PASSWORD")
    missing = [k for k in required_vars if not os.getenv(k)]
    if missing:
        raise RuntimeError(f"필수 환경 변수 누락: {', '.join(missing)}")

    return Settings(
        app_env=os.environ["APP_ENV"],
        server_name=os.environ["SERVER_NAME"],
        jira_base_url=os.environ["JIRA_BASE_URL"].strip(),
        user_id=os.environ["USER_ID"].strip(),
        user_password=os.environ["USER_PASSWORD"].strip(),
        jira_timeout=float(os.getenv("JIRA_TIMEOUT", "30")),
        field_mapping_path=os.getenv("FIELD_MAPPING_PATH", ""),
    )
