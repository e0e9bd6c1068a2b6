from aws_cdk import (
    aws_ecr as ecr,
    RemovalPolicy,
)
from constructs import Construct


def create_ecr_repository(scope: Construct, construct_id: str, repository_name: str) -> ecr.Repository:
    """Create the ECR repository for the dbt image."""
    return ecr.Repository(
        scope, construct_id,
        repository_name=repository_name,
        # Use RETAIN for production environments
        removal_policy=RemovalPolicy.DESTROY,
        empty_on_delete=True
    )
