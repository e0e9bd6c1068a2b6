from typing import Optional

from aws_cdk import (
    Stack,
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_logs as logs,
    aws_s3 as s3,
    aws_stepfunctions as sfn,
    Duration,
    RemovalPolicy,
    CfnOutput
)
from constructs import Construct

from dbt_deploy.config import StackConfig
from dbt_deploy.workflow import CLUSTER_NAME, CONTAINER_NAME, TASK_FAMILY, WORKFLOW_NAME
from infrastructure.lib.dbt_task import create_dbt_debug_task, create_dbt_run_task
from infrastructure.lib.ecr import create_ecr_repository
from infrastructure.lib.iam import (
    create_dbt_task_role,
    create_ecs_execution_role,
    create_step_functions_role,
)
from infrastructure.lib.ssm import create_snowflake_config_parameter


class DbtSnowflakeStack(Stack):
    def __init__(self, scope: Construct, construct_id: str,
                 config: Optional[StackConfig] = None,
                 vpc: Optional[ec2.IVpc] = None, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        config = config or StackConfig.from_env()
        self.config = config

        # ECR repository for the dbt image
        self.repository = create_ecr_repository(self, "DbtRepository", config.repository_name)

        artifacts_bucket = s3.Bucket.from_bucket_name(
            self, "ArtifactsBucket", config.artifacts_bucket_name
        )

        # IAM roles
        execution_role = create_ecs_execution_role(self, "EcsExecutionRole")
        task_role = create_dbt_task_role(self, "DbtTaskRole", artifacts_bucket.bucket_arn)

        # Default VPC unless one is supplied
        self.vpc = vpc or ec2.Vpc.from_lookup(self, "DefaultVPC", is_default=True)

        self.cluster = ecs.Cluster(
            self, "DbtCluster",
            cluster_name=CLUSTER_NAME,
            vpc=self.vpc
        )

        self.task_definition = ecs.FargateTaskDefinition(
            self, "DbtTaskDefinition",
            family=TASK_FAMILY,
            execution_role=execution_role,
            task_role=task_role,
            cpu=1024,
            memory_limit_mib=2048,
            ephemeral_storage_gib=21
        )

        snowflake_environment = config.snowflake.as_environment()

        self.container = self.task_definition.add_container(
            CONTAINER_NAME,
            image=ecs.ContainerImage.from_ecr_repository(self.repository, "latest"),
            logging=ecs.LogDrivers.aws_logs(
                stream_prefix="dbt",
                log_group=logs.LogGroup(
                    self, "DbtLogGroup",
                    log_group_name="/ecs/dbt-tasks",
                    retention=logs.RetentionDays.TWO_YEARS,
                    removal_policy=RemovalPolicy.DESTROY
                )
            ),
            environment={
                "DBT_PROFILES_DIR": config.profiles_dir,
                **snowflake_environment
            },
            health_check=ecs.HealthCheck(
                command=["CMD-SHELL", "dbt --version || exit 1"],
                interval=Duration.seconds(30),
                timeout=Duration.seconds(5),
                retries=3,
                start_period=Duration.seconds(5)
            )
        )

        if config.snowflake_ssm_parameter_name:
            create_snowflake_config_parameter(
                self, "DbtSnowflakeConfig",
                config.snowflake_ssm_parameter_name,
                snowflake_environment
            )

        step_functions_role = create_step_functions_role(self, "StepFunctionsRole")

        security_group = ec2.SecurityGroup(
            self, "DbtSecurityGroup",
            vpc=self.vpc,
            description="Security group for dbt tasks",
            # Tasks need outbound access to Snowflake and ECR
            allow_all_outbound=True
        )

        debug_task = create_dbt_debug_task(
            self, self.cluster, self.task_definition, self.container,
            snowflake_environment, security_group
        )
        run_task = create_dbt_run_task(
            self, self.cluster, self.task_definition, self.container,
            snowflake_environment, security_group
        )

        self.state_machine = sfn.StateMachine(
            self, "DbtWorkflow",
            definition_body=sfn.DefinitionBody.from_chainable(debug_task.next(run_task)),
            state_machine_name=WORKFLOW_NAME,
            role=step_functions_role
        )

        # Outputs
        CfnOutput(
            self, "EcrRepositoryUri",
            value=self.repository.repository_uri,
            description="ECR Repository URI"
        )

        CfnOutput(
            self, "StateMachineArn",
            value=self.state_machine.state_machine_arn,
            description="Step Functions State Machine ARN"
        )
