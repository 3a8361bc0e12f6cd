import os

import boto3
from dotenv import load_dotenv

from audience_commons.constants.db_constants import DBConstants

load_dotenv()
# Singleton instance
dynamodb_resource = boto3.resource(
    'dynamodb',
    region_name=os.getenv(DBConstants.AWS_REGION, DBConstants.DEFAULT_REGION),
    aws_access_key_id=os.getenv(DBConstants.AWS_DYNAMODB_ACCESS_KEY_ID),
    aws_secret_access_key=os.getenv(DBConstants.AWS_DYNAMODB_SECRET_ACCESS_KEY),
)


def get_dynamodb_resource():
    return dynamodb_resource
