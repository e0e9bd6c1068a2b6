from setuptools import setup, find_packages

setup(
    name="dbt-snowflake-cdk",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "aws-cdk-lib>=2.100.0",
        "constructs>=10.0.0",
        "boto3>=1.26.0",
        "python-dotenv>=1.0.0"
    ],
    extras_require={
        "test": ["pytest>=7.0.0"]
    },
    entry_points={
        "console_scripts": [
            "dbt-deploy-image=dbt_deploy.deploy_image:main",
            "dbt-full-deploy=dbt_deploy.full_deploy:main",
            "dbt-build-and-push=dbt_deploy.build_and_push:main"
        ]
    },
    python_requires=">=3.9",
)
