"""
DynamoDB utility functions for data access.
"""
import os
from typing import Dict, Optional, Any
import boto3

# Singleton instance
_dynamo_instance = None

CYCLE_DATA_SK = "CYCLE_DATA"

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.
    
    This is the ONLY way to access DynamoDB in this project. Never instantiate
    DynamoDBClient directly outside tests.
    
    Example:
        dynamo = get_dynamo()
        item = dynamo.get_item({"PK": create_pk("123"), "SK": CYCLE_DATA_SK})
    
    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client
        
    Raises:
        EnvironmentError: If TRACKER_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['TRACKER_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "TRACKER_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Client for interacting with DynamoDB table."""
    
    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
    
    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put a single item into the table.
        
        Args:
            item: Dictionary containing item attributes
            
        Returns:
            Response from DynamoDB
        """
        return self.table.put_item(Item=item)
    
    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single item from the table.
        
        Args:
            key: Dictionary containing partition key and sort key
            
        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_cycle_data_key(user_id: str) -> Dict[str, str]:
    """Create the key of the item holding a user's cycle data blob."""
    return {"PK": create_pk(user_id), "SK": CYCLE_DATA_SK}
