#!/usr/bin/env python3
"""
Full deployment: CDK stacks, then the Docker image, then (optionally) a
workflow execution.

Usage:
    dbt-full-deploy          # deploy stacks and image
    dbt-full-deploy --run    # ...and start the Step Functions workflow
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from dbt_deploy.build_and_push import configure_logging, run_command
from dbt_deploy.config import DeployConfig, load_env_file
from dbt_deploy.deploy_image import deploy_image
from dbt_deploy.errors import DeploymentError
from dbt_deploy.workflow import (
    execution_console_url,
    execution_name,
    print_next_steps,
    start_workflow_execution,
    state_machine_arn,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Deploy the dbt Snowflake stacks and image"
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Start a Step Functions execution after deploying",
    )
    return parser.parse_args(argv)


def deploy_stacks() -> None:
    # The working directory is the project checkout
    run_command(["cdk", "deploy", "--require-approval", "never"], cwd=str(Path.cwd()))


def full_deploy(config: DeployConfig, run_workflow: bool = False) -> None:
    print("\n1/3: Deploying CDK stacks...")
    deploy_stacks()
    print("CDK stack deployment completed")

    print("\n2/3: Building and pushing Docker image...")
    uri = deploy_image(config)
    print(f"Docker image push completed: {uri}")

    if not run_workflow:
        print("\n3/3: Step Functions execution skipped")
        print("To execute, use the --run option")
        return

    print("\n3/3: Executing Step Functions...")
    name = execution_name()
    start_workflow_execution(config.region, config.account_id, name)
    arn = state_machine_arn(config.region, config.account_id)
    print(f"Step Functions execution started: {name}")
    print(f"To check execution status: {execution_console_url(config.region, arn, name)}")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging()
    load_env_file()
    config = DeployConfig.from_env()

    print("=== DBT Snowflake Full Deployment Tool ===")
    print(f"Date: {datetime.now():%Y-%m-%d %H:%M:%S}")
    print(f"Environment: {config.environment}")
    print(f"Repository Name: {config.repository_name}")
    print(f"Region: {config.region}")
    print(f"Account ID: {config.account_id}")
    print("----------------------------------------")

    try:
        full_deploy(config, run_workflow=args.run)
    except (DeploymentError, ClientError, BotoCoreError) as e:
        logger.error(f"An error occurred during deployment: {e}")
        sys.exit(1)

    print("\nDeployment completed successfully!")
    print_next_steps(config.region, config.account_id)


if __name__ == "__main__":
    main()
