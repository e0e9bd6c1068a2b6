import json
from typing import Dict

from aws_cdk import (
    aws_ssm as ssm,
)
from constructs import Construct


def create_snowflake_config_parameter(scope: Construct, construct_id: str,
                                      parameter_name: str,
                                      config: Dict[str, str]) -> ssm.StringParameter:
    """Store the Snowflake connection settings as a single JSON parameter."""
    return ssm.StringParameter(
        scope, construct_id,
        parameter_name=parameter_name,
        string_value=json.dumps(config),
        description="dbt Snowflake connection settings"
    )
