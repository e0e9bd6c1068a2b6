from aws_cdk import (
    aws_iam as iam,
)
from constructs import Construct


def create_ecs_execution_role(scope: Construct, construct_id: str) -> iam.Role:
    """Role ECS uses to pull the image and ship logs."""
    return iam.Role(
        scope, construct_id,
        assumed_by=iam.ServicePrincipal("ecs-tasks.amazonaws.com"),
        role_name="ecsTaskExecutionRole",
        managed_policies=[
            iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AmazonECSTaskExecutionRolePolicy")
        ]
    )


def create_dbt_task_role(scope: Construct, construct_id: str, bucket_arn: str) -> iam.Role:
    """Role assumed by the dbt container itself.

    Grants log writes, parameter/secret reads and object access on the
    artifacts bucket.
    """
    role = iam.Role(
        scope, construct_id,
        assumed_by=iam.ServicePrincipal("ecs-tasks.amazonaws.com"),
        role_name="dbtTaskRole"
    )

    role.add_to_policy(
        iam.PolicyStatement(
            actions=[
                "logs:CreateLogStream",
                "logs:PutLogEvents",
                "ssm:GetParameters",
                "secretsmanager:GetSecretValue"
            ],
            resources=["*"]
        )
    )

    role.add_to_policy(
        iam.PolicyStatement(
            actions=[
                "s3:PutObject",
                "s3:GetObject",
                "s3:ListBucket"
            ],
            resources=[bucket_arn, f"{bucket_arn}/*"]
        )
    )

    return role


def create_step_functions_role(scope: Construct, construct_id: str) -> iam.Role:
    role = iam.Role(
        scope, construct_id,
        assumed_by=iam.ServicePrincipal("states.amazonaws.com"),
        role_name="StepFunctionsServiceRole"
    )

    # Should be scoped down in production
    role.add_to_policy(
        iam.PolicyStatement(
            actions=[
                "ecs:RunTask",
                "ecs:StopTask",
                "ecs:DescribeTasks",
                "iam:PassRole"
            ],
            resources=["*"]
        )
    )

    return role
