"""Environment-driven settings shared by the CDK app and the deploy scripts."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_REPOSITORY_NAME = "dbt-snowflake"
DEFAULT_REGION = "ap-northeast-1"
DEFAULT_ACCOUNT_ID = "123456789012"
DEFAULT_IMAGE_TAG = "latest"
DEFAULT_DOCKERFILE = "docker/Dockerfile"


def env_or_default(name: str, default: str) -> str:
    """Return the variable's value, or ``default`` when it is unset or empty."""
    return os.environ.get(name) or default


def load_env_file(path: Optional[Path] = None) -> bool:
    """Seed os.environ from .env in the working directory, keeping existing values."""
    return load_dotenv(path or Path.cwd() / ".env", override=False)


def repository_name_for(environment: str) -> str:
    base = env_or_default("ECR_REPOSITORY_NAME", DEFAULT_REPOSITORY_NAME)
    return f"{base}-{environment}"


@dataclass
class DeployConfig:
    environment: str
    repository_name: str
    region: str
    account_id: str
    image_tag: str = DEFAULT_IMAGE_TAG
    dockerfile: str = DEFAULT_DOCKERFILE
    build_context: str = "."

    @classmethod
    def from_env(cls, default_region: str = DEFAULT_REGION) -> "DeployConfig":
        environment = env_or_default("ENVIRONMENT", DEFAULT_ENVIRONMENT)
        return cls(
            environment=environment,
            repository_name=repository_name_for(environment),
            region=env_or_default("AWS_REGION", default_region),
            account_id=env_or_default("AWS_ACCOUNT", DEFAULT_ACCOUNT_ID),
        )


@dataclass
class SnowflakeConnection:
    account: str = ""
    host: str = ""
    user: str = ""
    password: str = ""
    private_key_path: str = ""
    role: str = "ACCOUNTADMIN"
    database: str = "MY_DBT_DB"
    warehouse: str = "TRANSFORMING"
    schema: str = "TPCH_SF1"

    @classmethod
    def from_env(cls) -> "SnowflakeConnection":
        defaults = cls()
        return cls(
            account=env_or_default("DB_SNOWFLAKE_ACCOUNT", defaults.account),
            host=env_or_default("DB_SNOWFLAKE_HOST", defaults.host),
            user=env_or_default("DB_SNOWFLAKE_USER", defaults.user),
            password=env_or_default("DB_SNOWFLAKE_PASSWORD", defaults.password),
            private_key_path=env_or_default(
                "DB_SNOWFLAKE_PRIVATE_KEY_PATH", defaults.private_key_path
            ),
            role=env_or_default("DB_SNOWFLAKE_ROLE", defaults.role),
            database=env_or_default("DB_SNOWFLAKE_DATABASE", defaults.database),
            warehouse=env_or_default("DB_SNOWFLAKE_WAREHOUSE", defaults.warehouse),
            schema=env_or_default("DB_SNOWFLAKE_SCHEMA", defaults.schema),
        )

    def as_environment(self) -> Dict[str, str]:
        """Container environment variables, in a stable order."""
        return {
            "DB_SNOWFLAKE_ACCOUNT": self.account,
            "DB_SNOWFLAKE_HOST": self.host,
            "DB_SNOWFLAKE_USER": self.user,
            "DB_SNOWFLAKE_PASSWORD": self.password,
            "DB_SNOWFLAKE_PRIVATE_KEY_PATH": self.private_key_path,
            "DB_SNOWFLAKE_ROLE": self.role,
            "DB_SNOWFLAKE_DATABASE": self.database,
            "DB_SNOWFLAKE_WAREHOUSE": self.warehouse,
            "DB_SNOWFLAKE_SCHEMA": self.schema,
        }


@dataclass
class StackConfig:
    environment: str = DEFAULT_ENVIRONMENT
    repository_base_name: str = DEFAULT_REPOSITORY_NAME
    artifacts_bucket_name: str = "dbt-snowflake-artifacts"
    profiles_dir: str = "/usr/src/app/dbt/profiles"
    snowflake: SnowflakeConnection = field(default_factory=SnowflakeConnection)
    snowflake_ssm_parameter_name: str = ""

    @property
    def repository_name(self) -> str:
        return f"{self.repository_base_name}-{self.environment}"

    @classmethod
    def from_env(cls) -> "StackConfig":
        defaults = cls()
        return cls(
            environment=env_or_default("ENVIRONMENT", defaults.environment),
            repository_base_name=env_or_default(
                "ECR_REPOSITORY_NAME", defaults.repository_base_name
            ),
            artifacts_bucket_name=env_or_default(
                "ARTIFACTS_BUCKET_NAME", defaults.artifacts_bucket_name
            ),
            profiles_dir=env_or_default("DBT_PROFILES_DIR", defaults.profiles_dir),
            snowflake=SnowflakeConnection.from_env(),
            snowflake_ssm_parameter_name=env_or_default(
                "DBT_SNOWFLAKE_SSM_PARAMETER", ""
            ),
        )
