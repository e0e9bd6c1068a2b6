#!/usr/bin/env python3
import os
import aws_cdk as cdk
from dbt_deploy.config import StackConfig, load_env_file
from infrastructure.lib.dbt_stack import DbtSnowflakeStack

load_env_file()

app = cdk.App()

env = cdk.Environment(
    account=os.getenv("CDK_DEFAULT_ACCOUNT"),
    region=os.getenv("CDK_DEFAULT_REGION"),
)

config = StackConfig.from_env()

stack = DbtSnowflakeStack(
    app,
    "CdkStack",
    config=config,
    env=env,
    description="dbt on ECS Fargate orchestrated by Step Functions",
)

cdk.Tags.of(stack).add("Project", "DbtSnowflake")
cdk.Tags.of(stack).add("Environment", config.environment)

app.synth()
