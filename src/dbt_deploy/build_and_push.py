#!/usr/bin/env python3
"""
Build the dbt image and push it to ECR.

Used by the deploy-image and full-deploy scripts, and runnable on its own:

    dbt-build-and-push

Run standalone it targets ECR_REPOSITORY_NAME (no environment suffix) in
AWS_REGION (default us-east-1) and resolves the account through STS unless
AWS_ACCOUNT is set.
"""
import base64
import logging
import subprocess
import sys
from typing import Any, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dbt_deploy.config import (
    DEFAULT_DOCKERFILE,
    DEFAULT_IMAGE_TAG,
    DEFAULT_REPOSITORY_NAME,
    env_or_default,
    load_env_file,
)
from dbt_deploy.errors import CommandError, DeploymentError

logger = logging.getLogger(__name__)

REGISTRY_DOMAIN = "dkr.ecr.{region}.amazonaws.com"
STANDALONE_DEFAULT_REGION = "us-east-1"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_command(
    cmd: List[str],
    input: Optional[str] = None,
    cwd: Optional[str] = None,
) -> None:
    """Run an external command with output going straight to the terminal.

    A non-zero exit, or a command that cannot be started at all, raises
    CommandError.
    """
    logger.info(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, input=input, cwd=cwd, text=True, check=False)
    except OSError as e:
        raise CommandError(cmd, 127, str(e)) from e
    if result.returncode != 0:
        raise CommandError(cmd, result.returncode)


def registry_host(account_id: str, region: str) -> str:
    return f"{account_id}.{REGISTRY_DOMAIN.format(region=region)}"


def repository_uri(account_id: str, region: str, repository_name: str) -> str:
    return f"{registry_host(account_id, region)}/{repository_name}"


def image_uri(account_id: str, region: str, repository_name: str, tag: str) -> str:
    return f"{repository_uri(account_id, region, repository_name)}:{tag}"


def ensure_repository_exists(region: str, repository_name: str, client: Any = None) -> None:
    """Create the ECR repository unless it already exists.

    Only a RepositoryNotFoundException counts as "absent"; credential,
    throttling and network errors propagate.
    """
    ecr = client or boto3.client("ecr", region_name=region)
    logger.info(f"Checking ECR repository {repository_name} in {region}")
    try:
        ecr.describe_repositories(repositoryNames=[repository_name])
        logger.info(f"ECR repository {repository_name} exists")
        return
    except ClientError as e:
        if e.response["Error"]["Code"] != "RepositoryNotFoundException":
            raise

    logger.info(f"Creating ECR repository {repository_name}")
    ecr.create_repository(repositoryName=repository_name)
    logger.info(f"Created ECR repository {repository_name}")


def docker_login(account_id: str, region: str, client: Any = None) -> None:
    ecr = client or boto3.client("ecr", region_name=region)
    logger.info("Logging in to ECR")
    auth = ecr.get_authorization_token()["authorizationData"][0]
    token = base64.b64decode(auth["authorizationToken"]).decode("utf-8")
    username, password = token.split(":", 1)
    run_command(
        [
            "docker",
            "login",
            "--username",
            username,
            "--password-stdin",
            registry_host(account_id, region),
        ],
        input=password,
    )


def build_and_push_image(
    account_id: str,
    region: str,
    repository_name: str,
    tag: str = DEFAULT_IMAGE_TAG,
    dockerfile: str = DEFAULT_DOCKERFILE,
    context: str = ".",
    client: Any = None,
) -> str:
    """Login, build, tag and push. Returns the pushed image URI."""
    local_name = f"{repository_name}:{tag}"
    remote_name = image_uri(account_id, region, repository_name, tag)

    docker_login(account_id, region, client=client)

    logger.info(f"Building Docker image {local_name}")
    run_command(["docker", "build", "-t", local_name, "-f", dockerfile, context])

    logger.info(f"Tagging image as {remote_name}")
    run_command(["docker", "tag", local_name, remote_name])

    logger.info("Pushing image to ECR")
    run_command(["docker", "push", remote_name])

    logger.info(f"Image pushed: {remote_name}")
    return remote_name


def resolve_account_id(client: Any = None) -> str:
    sts = client or boto3.client("sts")
    return sts.get_caller_identity()["Account"]


def main() -> None:
    configure_logging()
    load_env_file()

    region = env_or_default("AWS_REGION", STANDALONE_DEFAULT_REGION)
    repository_name = env_or_default("ECR_REPOSITORY_NAME", DEFAULT_REPOSITORY_NAME)

    try:
        logger.info("Resolving AWS account ID")
        account_id = env_or_default("AWS_ACCOUNT", "") or resolve_account_id()
        ensure_repository_exists(region, repository_name)
        uri = build_and_push_image(account_id, region, repository_name)
    except (DeploymentError, ClientError, BotoCoreError) as e:
        logger.error(f"Build and push failed: {e}")
        sys.exit(1)

    print(f"Image pushed successfully: {uri}")


if __name__ == "__main__":
    main()
