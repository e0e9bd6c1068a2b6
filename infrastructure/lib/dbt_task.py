from typing import Dict, List

from aws_cdk import (
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_stepfunctions as sfn,
    aws_stepfunctions_tasks as tasks,
)
from constructs import Construct

DEBUG_COMMAND = ["debug"]
RUN_COMMAND = ["run", "--fail-fast"]


def _ecs_run_task(scope: Construct, construct_id: str, cluster: ecs.ICluster,
                  task_definition: ecs.TaskDefinition,
                  container: ecs.ContainerDefinition, command: List[str],
                  environment: Dict[str, str],
                  security_group: ec2.ISecurityGroup) -> tasks.EcsRunTask:
    return tasks.EcsRunTask(
        scope, construct_id,
        cluster=cluster,
        task_definition=task_definition,
        launch_target=tasks.EcsFargateLaunchTarget(
            platform_version=ecs.FargatePlatformVersion.LATEST
        ),
        container_overrides=[
            tasks.ContainerOverride(
                container_definition=container,
                command=command,
                environment=[
                    tasks.TaskEnvironmentVariable(name=name, value=value)
                    for name, value in environment.items()
                ]
            )
        ],
        security_groups=[security_group],
        assign_public_ip=True,
        subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC),
        # Wait for the container to exit before moving on
        integration_pattern=sfn.IntegrationPattern.RUN_JOB
    )


def create_dbt_debug_task(scope: Construct, cluster: ecs.ICluster,
                          task_definition: ecs.TaskDefinition,
                          container: ecs.ContainerDefinition,
                          environment: Dict[str, str],
                          security_group: ec2.ISecurityGroup) -> tasks.EcsRunTask:
    """Workflow step running `dbt debug` to check the Snowflake connection."""
    return _ecs_run_task(scope, "DbtDebugTask", cluster, task_definition,
                         container, DEBUG_COMMAND, environment, security_group)


def create_dbt_run_task(scope: Construct, cluster: ecs.ICluster,
                        task_definition: ecs.TaskDefinition,
                        container: ecs.ContainerDefinition,
                        environment: Dict[str, str],
                        security_group: ec2.ISecurityGroup) -> tasks.EcsRunTask:
    """Workflow step running `dbt run --fail-fast`."""
    return _ecs_run_task(scope, "DbtRunTask", cluster, task_definition,
                         container, RUN_COMMAND, environment, security_group)
