from .client import create_dynamodb_resource
from .item_store import DynamoDBItemStore

__all__ = ["create_dynamodb_resource", "DynamoDBItemStore"]
