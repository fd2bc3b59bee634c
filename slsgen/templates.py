"""File templates for the generated serverless project.

Each function returns the text of one generated file. JSON files are built
from dictionaries so they are always well formed.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

PYTHON_RUNTIME = "python3.9"
NODE_VERSION = "18"

# Project directories, each receives an __init__.py
PROJECT_DIRECTORIES = (
    "config",
    "docs",
    "scripts",
    "src",
    "src/functions",
    "src/models",
    "src/utils",
    "tests",
    "tests/unit",
    "tests/integration",
)

REQUIREMENTS = (
    "boto3>=1.26.0",
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
    "black>=23.0.0",
    "flake8>=6.0.0",
    "pynamodb>=5.0.0",
    "python-dotenv>=1.0.0",
    "requests>=2.28.0",
    "mypy>=1.0.0",
    "aws-lambda-powertools>=2.0.0",
)

TYPESCRIPT_DEV_DEPENDENCIES = {
    "typescript": "^5.3.0",
    "@types/node": "^20.10.0",
    "ts-node": "^10.9.0",
}


def _json(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def init_module(module_name: str, project_name: str) -> str:
    """Docstring-only ``__init__.py`` for a project package."""
    return f'"""Module {module_name} of the {project_name} project."""\n'


def readme(project_name: str, plugins: Sequence[str]) -> str:
    """Project README with quick start and layout overview."""
    plugin_lines = "\n".join(f"- {plugin}" for plugin in plugins) or "- (none)"
    return f"""# {project_name}

## 📋 Description
Serverless API scaffolding generated by serverless-python-generator.

## 🚀 Quick Start

### Prerequisites
- Python 3.9+
- Node.js {NODE_VERSION}+
- AWS CLI configured
- Serverless Framework

### Installation
```bash
python3 -m venv .venv
source .venv/bin/activate
pip install -r requirements.txt
npm install

# Start local development
serverless offline start
```

## 🏗️ Project Structure
```
├── src/
│   ├── functions/    # Lambda functions and handlers
│   ├── models/       # Data models and schemas
│   └── utils/        # Shared utilities
├── tests/
│   ├── unit/         # Unit tests
│   └── integration/  # Integration tests
├── docs/             # Project documentation
├── scripts/          # Utility scripts
└── config/           # Configuration files
```

## 🛠️ Development
```bash
pytest
pre-commit run --all-files
serverless deploy --stage dev
serverless deploy --stage prod
```

## 🔌 Serverless Plugins
{plugin_lines}

## 📄 License
Distributed under the MIT License.
"""


def env_example() -> str:
    """Example environment variables."""
    return """# Example environment variables
AWS_ACCESS_KEY_ID=your_access_key
AWS_SECRET_ACCESS_KEY=your_secret_key
AWS_DEFAULT_REGION=
DATABASE_URL=your_database_url
"""


def serverless_yml(project_name: str, plugins: Sequence[str]) -> str:
    """Serverless Framework manifest listing the selected plugins."""
    plugin_block = "".join(f"  - {plugin}\n" for plugin in plugins) if plugins else "  []\n"
    return f"""service: {project_name}

provider:
  name: aws
  runtime: {PYTHON_RUNTIME}
  region: ${{opt:region, 'us-east-1'}}
  stage: ${{opt:stage, 'dev'}}
  environment:
    STAGE: ${{self:provider.stage}}
    REGION: ${{self:provider.region}}
    DYNAMODB_TABLE: ${{self:service}}-${{self:provider.stage}}
    DYNAMODB_ENDPOINT: http://localhost:8000
  iam:
    role:
      statements:
        - Effect: Allow
          Action:
            - dynamodb:Query
            - dynamodb:Scan
            - dynamodb:GetItem
            - dynamodb:PutItem
            - dynamodb:UpdateItem
            - dynamodb:DeleteItem
            - dynamodb:ListTables
          Resource: "*"

plugins:
{plugin_block}
custom:
  pythonRequirements:
    dockerizePip: true
    layer:
      name: python-deps
  dynamodb:
    start:
      port: 8000
      inMemory: true
      migrate: true
      seed: true
    stages:
      - dev
    seed:
      domain:
        sources:
          - table: ${{self:provider.environment.DYNAMODB_TABLE}}
            sources: [./config/dynamodb/orders.json]
  serverless-offline:
    httpPort: 3000
    lambdaPort: 3002
    noPrependStageInUrl: true

functions:
  hello:
    handler: src/functions/hello.handler
    events:
      - http:
          path: /
          method: get

resources:
  Resources:
    OrdersTable:
      Type: AWS::DynamoDB::Table
      Properties:
        TableName: ${{self:provider.environment.DYNAMODB_TABLE}}
        AttributeDefinitions:
          - AttributeName: id
            AttributeType: S
          - AttributeName: status
            AttributeType: S
        KeySchema:
          - AttributeName: id
            KeyType: HASH
        GlobalSecondaryIndexes:
          - IndexName: StatusIndex
            KeySchema:
              - AttributeName: status
                KeyType: HASH
            Projection:
              ProjectionType: ALL
        BillingMode: PAY_PER_REQUEST
"""


def dynamodb_seed() -> str:
    """Seed data for DynamoDB Local."""
    item = {
        "id": {"S": "WO-001"},
        "status": {"S": "received"},
        "description": {"S": "Sample order 1"},
        "createdAt": {"S": "2024-02-16T12:00:00Z"},
    }
    return _json({"OrdersTable": [{"PutRequest": {"Item": item}}]})


def hello_handler() -> str:
    """Sample Lambda handler for the ``hello`` endpoint."""
    return '''"""Lambda handler for the hello endpoint."""

import json
import logging
import os
from typing import Any, Dict

import boto3

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def get_dynamodb_client():
    """Return a DynamoDB client, pointed at DynamoDB Local when configured."""
    endpoint_url = os.environ.get("DYNAMODB_ENDPOINT")
    if endpoint_url:
        return boto3.client(
            "dynamodb",
            endpoint_url=endpoint_url,
            aws_access_key_id="DUMMYIDEXAMPLE",
            aws_secret_access_key="DUMMYEXAMPLEKEY",
        )
    return boto3.client("dynamodb")


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Handle an API Gateway request."""
    logger.info("Event received: %s", event)
    try:
        tables = get_dynamodb_client().list_tables()
        body = {
            "message": "Hello from Lambda!",
            "dynamodb_tables": tables.get("TableNames", []),
            "table_name": os.environ.get("DYNAMODB_TABLE", ""),
        }
        return {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(body),
        }
    except Exception as e:
        logger.error("Error: %s", e)
        return {"statusCode": 500, "body": json.dumps({"error": str(e)})}
'''


def requirements_txt() -> str:
    """Python dependencies of the generated project."""
    return "\n".join(REQUIREMENTS) + "\n"


def package_json(project_name: str, plugins: Sequence[str], use_typescript: bool) -> str:
    """npm manifest with the selected plugins as dev dependencies."""
    dev_dependencies = {"serverless": "^3.38.0"}
    dev_dependencies.update(dict.fromkeys(plugins, "latest"))
    if use_typescript:
        dev_dependencies.update(TYPESCRIPT_DEV_DEPENDENCIES)
    scripts = {
        "start": "serverless offline start",
        "deploy": "serverless deploy",
    }
    if use_typescript:
        scripts["build"] = "tsc"
    return _json(
        {
            "name": project_name.lower(),
            "version": "0.1.0",
            "private": True,
            "scripts": scripts,
            "devDependencies": dict(sorted(dev_dependencies.items())),
        },
    )


def tsconfig_json() -> str:
    """TypeScript compiler settings for Node tooling scripts."""
    return _json(
        {
            "compilerOptions": {
                "target": "ES2020",
                "module": "commonjs",
                "strict": True,
                "esModuleInterop": True,
                "outDir": "dist",
            },
            "include": ["scripts/**/*.ts"],
        },
    )


def start_local_script(project_name: str) -> str:
    """Script starting DynamoDB Local and serverless-offline."""
    return f"""#!/bin/bash
set -e

export AWS_ACCESS_KEY_ID='DUMMYIDEXAMPLE'
export AWS_SECRET_ACCESS_KEY='DUMMYEXAMPLEKEY'

if ! command -v java &>/dev/null; then
    echo "Java is required for DynamoDB Local: sudo apt install -y default-jre"
    exit 1
fi

if [ ! -f .env ]; then
    cat > .env <<ENVEOF
AWS_ACCESS_KEY_ID=DUMMYIDEXAMPLE
AWS_SECRET_ACCESS_KEY=DUMMYEXAMPLEKEY
DYNAMODB_ENDPOINT=http://localhost:8000
STAGE=dev
ENVEOF
fi

trap 'jobs -p | xargs -r kill' EXIT

echo "Starting DynamoDB Local..."
JAVA_OPTS="-Xms512m -Xmx512m" serverless dynamodb start &

max_attempts=30
attempt=0
until curl -s http://localhost:8000 >/dev/null; do
    attempt=$((attempt+1))
    if [ $attempt -eq $max_attempts ]; then
        echo "DynamoDB Local did not start after $max_attempts attempts"
        exit 1
    fi
    sleep 1
done

aws dynamodb create-table \\
    --table-name {project_name}-dev \\
    --attribute-definitions AttributeName=id,AttributeType=S AttributeName=status,AttributeType=S \\
    --key-schema AttributeName=id,KeyType=HASH \\
    --global-secondary-indexes 'IndexName=StatusIndex,KeySchema=[{{AttributeName=status,KeyType=HASH}}],Projection={{ProjectionType=ALL}}' \\
    --billing-mode PAY_PER_REQUEST \\
    --endpoint-url http://localhost:8000 2>/dev/null || true

echo "Starting serverless-offline..."
serverless offline
"""


def flake8_config() -> str:
    """flake8 settings matching the pre-commit hooks."""
    return """[flake8]
max-line-length = 80
extend-ignore = E203
exclude = .git,__pycache__,build,dist
docstring-convention = google
"""


def dockerfile() -> str:
    """Dockerfile for running the project locally."""
    return """FROM python:3.9-slim

WORKDIR /app
COPY requirements.txt .
RUN pip install -r requirements.txt
COPY . .
CMD ["serverless", "offline", "start"]
"""


def docker_compose() -> str:
    """Compose file wiring the app with local credentials."""
    return """version: '3.8'
services:
  app:
    build: .
    volumes:
      - .:/app
    ports:
      - "3000:3000"
    env_file: .env
    environment:
      - AWS_ACCESS_KEY_ID=dummy
      - AWS_SECRET_ACCESS_KEY=dummy
"""


def precommit_config() -> str:
    """pre-commit hooks: whitespace, black, flake8 and mypy."""
    return """repos:
  - repo: https://github.com/pre-commit/pre-commit-hooks
    rev: v4.4.0
    hooks:
      - id: trailing-whitespace
      - id: end-of-file-fixer
      - id: check-yaml
      - id: check-added-large-files
  - repo: https://github.com/psf/black
    rev: 23.12.1
    hooks:
      - id: black
        args: [--line-length=80]
  - repo: https://github.com/pycqa/flake8
    rev: 7.0.0
    hooks:
      - id: flake8
        args: [--max-line-length=80]
        additional_dependencies: [flake8-docstrings]
  - repo: https://github.com/pre-commit/mirrors-mypy
    rev: v1.8.0
    hooks:
      - id: mypy
        additional_dependencies:
          - types-requests
          - types-boto3
"""


def gitignore() -> str:
    """Ignore rules for virtualenvs, caches and Serverless output."""
    return """.venv/
node_modules/
__pycache__/
.env
.DS_Store
*.pyc
.coverage
htmlcov/
.pytest_cache/
.serverless/
.mypy_cache/
.dynamodb/
.terraform/
"""


def terraform_main(project_name: str) -> str:
    """Terraform configuration for shared infrastructure."""
    return f"""terraform {{
  required_version = ">= 1.5"
  required_providers {{
    aws = {{
      source  = "hashicorp/aws"
      version = "~> 5.0"
    }}
  }}
}}

provider "aws" {{
  region = var.region
}}

resource "aws_s3_bucket" "artifacts" {{
  bucket = "{project_name.lower()}-${{var.stage}}-artifacts"
}}
"""


def terraform_variables() -> str:
    """Terraform input variables."""
    return """variable "region" {
  type    = string
  default = "us-east-1"
}

variable "stage" {
  type    = string
  default = "dev"
}
"""


def ci_workflow(use_precommit: bool) -> str:
    """GitHub Actions workflow running the test suite."""
    lint_step = (
        """      - name: Lint
        run: |
          pip install pre-commit
          pre-commit run --all-files
"""
        if use_precommit
        else ""
    )
    return f"""name: CI

on:
  push:
    branches: [main]
  pull_request:

jobs:
  test:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - uses: actions/setup-python@v5
        with:
          python-version: "3.9"
      - uses: actions/setup-node@v4
        with:
          node-version: "{NODE_VERSION}"
      - name: Install dependencies
        run: |
          pip install -r requirements.txt
          npm install
{lint_step}      - name: Test
        run: pytest
"""
