"""Step Functions helpers for the dbt workflow."""
import logging
import time
from typing import Any, Optional

import boto3

logger = logging.getLogger(__name__)

WORKFLOW_NAME = "DBT-Snowflake-Workflow"
EXECUTION_PREFIX = "test"
CLUSTER_NAME = "dbt-cluster"
TASK_FAMILY = "dbt-task"
CONTAINER_NAME = "dbt-container"


def state_machine_arn(region: str, account_id: str, name: str = WORKFLOW_NAME) -> str:
    return f"arn:aws:states:{region}:{account_id}:stateMachine:{name}"


def execution_name(prefix: str = EXECUTION_PREFIX, now: Optional[float] = None) -> str:
    """Run identifier made of a fixed prefix and the current unix time."""
    seconds = int(time.time() if now is None else now)
    return f"{prefix}-{seconds}"


def execution_console_url(region: str, arn: str, name: str) -> str:
    return (
        f"https://{region}.console.aws.amazon.com/states/home?region={region}"
        f"#/executions/details/{arn}:{name}"
    )


def start_workflow_execution(region: str, account_id: str, name: str, client: Any = None) -> str:
    """Start the workflow and return the execution ARN."""
    sfn = client or boto3.client("stepfunctions", region_name=region)
    arn = state_machine_arn(region, account_id)
    logger.info(f"Starting execution {name} of {arn}")
    response = sfn.start_execution(stateMachineArn=arn, name=name)
    return response["executionArn"]


def print_next_steps(region: str, account_id: str) -> None:
    print("\nNext Steps:")
    print("1. Execute the workflow using Step Functions:")
    print(
        f"   aws stepfunctions start-execution --state-machine-arn "
        f"{state_machine_arn(region, account_id)} --name {EXECUTION_PREFIX}-$(date +%s)"
    )
    print("2. Or run the ECS task directly:")
    print(
        f"   aws ecs run-task --cluster {CLUSTER_NAME} --task-definition {TASK_FAMILY} "
        f'--launch-type FARGATE --network-configuration "awsvpcConfiguration='
        f'{{subnets=[<public-subnet-id>],assignPublicIp=ENABLED}}" '
        f"--overrides '{{\"containerOverrides\":[{{\"name\":\"{CONTAINER_NAME}\","
        f"\"command\":[\"debug\"]}}]}}'"
    )
