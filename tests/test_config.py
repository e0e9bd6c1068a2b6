from dbt_deploy.config import (
    DeployConfig,
    SnowflakeConnection,
    StackConfig,
    env_or_default,
    load_env_file,
)


def test_env_or_default_unset(clean_env):
    assert env_or_default("ENVIRONMENT", "dev") == "dev"


def test_env_or_default_empty(clean_env):
    clean_env.setenv("ENVIRONMENT", "")
    assert env_or_default("ENVIRONMENT", "dev") == "dev"


def test_env_or_default_set(clean_env):
    clean_env.setenv("ENVIRONMENT", "prod")
    assert env_or_default("ENVIRONMENT", "dev") == "prod"


def test_deploy_config_defaults():
    config = DeployConfig.from_env()

    assert config.environment == "dev"
    assert config.repository_name == "dbt-snowflake-dev"
    assert config.region == "ap-northeast-1"
    assert config.account_id == "123456789012"
    assert config.image_tag == "latest"
    assert config.dockerfile == "docker/Dockerfile"


def test_deploy_config_from_environment(clean_env):
    clean_env.setenv("ENVIRONMENT", "prod")
    clean_env.setenv("ECR_REPOSITORY_NAME", "analytics")
    clean_env.setenv("AWS_REGION", "eu-west-1")
    clean_env.setenv("AWS_ACCOUNT", "999999999999")

    config = DeployConfig.from_env()

    assert config.repository_name == "analytics-prod"
    assert config.region == "eu-west-1"
    assert config.account_id == "999999999999"


def test_deploy_config_empty_values_fall_back(clean_env):
    clean_env.setenv("ENVIRONMENT", "")
    clean_env.setenv("ECR_REPOSITORY_NAME", "")

    config = DeployConfig.from_env()

    assert config.repository_name == "dbt-snowflake-dev"


def test_deploy_config_region_default_override():
    assert DeployConfig.from_env(default_region="us-east-1").region == "us-east-1"


def test_stack_config_defaults():
    config = StackConfig.from_env()

    assert config.repository_name == "dbt-snowflake-dev"
    assert config.artifacts_bucket_name == "dbt-snowflake-artifacts"
    assert config.profiles_dir == "/usr/src/app/dbt/profiles"
    assert config.snowflake_ssm_parameter_name == ""
    assert config.snowflake == SnowflakeConnection()


def test_snowflake_connection_from_environment(clean_env):
    clean_env.setenv("DB_SNOWFLAKE_ACCOUNT", "acme-xy12345")
    clean_env.setenv("DB_SNOWFLAKE_ROLE", "TRANSFORMER")
    clean_env.setenv("DB_SNOWFLAKE_SCHEMA", "")

    env = SnowflakeConnection.from_env().as_environment()

    assert env["DB_SNOWFLAKE_ACCOUNT"] == "acme-xy12345"
    assert env["DB_SNOWFLAKE_ROLE"] == "TRANSFORMER"
    assert env["DB_SNOWFLAKE_SCHEMA"] == "TPCH_SF1"
    assert env["DB_SNOWFLAKE_PASSWORD"] == ""
    assert list(env)[0] == "DB_SNOWFLAKE_ACCOUNT"
    assert len(env) == 9


def test_load_env_file_keeps_existing_values(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ENVIRONMENT=staging\nAWS_REGION=us-west-2\n")
    clean_env.setenv("AWS_REGION", "eu-central-1")

    assert load_env_file(env_file) is True

    config = DeployConfig.from_env()
    assert config.environment == "staging"
    assert config.region == "eu-central-1"


def test_load_env_file_reads_working_directory(clean_env, tmp_path):
    (tmp_path / ".env").write_text("ECR_REPOSITORY_NAME=from-cwd\n")
    clean_env.chdir(tmp_path)

    assert load_env_file() is True
    assert DeployConfig.from_env().repository_name == "from-cwd-dev"
