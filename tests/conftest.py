import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

# Project root for `infrastructure`, src/ for `dbt_deploy`
project_root = Path(__file__).parent.parent
for path in (str(project_root), str(project_root / "src")):
    if path not in sys.path:
        sys.path.insert(0, path)

CONFIG_VARIABLES = [
    "ENVIRONMENT",
    "ECR_REPOSITORY_NAME",
    "AWS_REGION",
    "AWS_ACCOUNT",
    "ARTIFACTS_BUCKET_NAME",
    "DBT_PROFILES_DIR",
    "DBT_SNOWFLAKE_SSM_PARAMETER",
    "DB_SNOWFLAKE_ACCOUNT",
    "DB_SNOWFLAKE_HOST",
    "DB_SNOWFLAKE_USER",
    "DB_SNOWFLAKE_PASSWORD",
    "DB_SNOWFLAKE_PRIVATE_KEY_PATH",
    "DB_SNOWFLAKE_ROLE",
    "DB_SNOWFLAKE_DATABASE",
    "DB_SNOWFLAKE_WAREHOUSE",
    "DB_SNOWFLAKE_SCHEMA",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without any deployment settings in the environment."""
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch


@pytest.fixture
def mock_run():
    """Patch subprocess.run so no docker/cdk command actually executes."""
    with patch("dbt_deploy.build_and_push.subprocess.run") as run:
        run.return_value = Mock(returncode=0, stdout="", stderr="")
        yield run
