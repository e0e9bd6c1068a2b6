#!/usr/bin/env python3
"""
Build and push the dbt Docker image without touching the CDK stacks.

Usage:
    dbt-deploy-image
"""
import logging
import sys

from botocore.exceptions import BotoCoreError, ClientError

from dbt_deploy.build_and_push import (
    build_and_push_image,
    configure_logging,
    ensure_repository_exists,
)
from dbt_deploy.config import DeployConfig, load_env_file
from dbt_deploy.errors import DeploymentError
from dbt_deploy.workflow import print_next_steps

logger = logging.getLogger(__name__)


def deploy_image(config: DeployConfig) -> str:
    ensure_repository_exists(config.region, config.repository_name)
    return build_and_push_image(
        config.account_id,
        config.region,
        config.repository_name,
        config.image_tag,
        config.dockerfile,
        config.build_context,
    )


def main() -> None:
    configure_logging()
    load_env_file()
    config = DeployConfig.from_env()

    print("=== DBT Snowflake Image Deployment Tool ===")
    print(f"Repository Name: {config.repository_name}")
    print(f"Region: {config.region}")
    print(f"Account ID: {config.account_id}")

    try:
        uri = deploy_image(config)
    except (DeploymentError, ClientError, BotoCoreError) as e:
        logger.error(f"An error occurred during deployment: {e}")
        sys.exit(1)

    print("\nDeployment completed successfully!")
    print(f"Image URI: {uri}")
    print_next_steps(config.region, config.account_id)


if __name__ == "__main__":
    main()
