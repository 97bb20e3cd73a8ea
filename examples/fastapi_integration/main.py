"""
FastAPI Integration Example

Demonstrates serving lazyaws pages to a frontend: each request returns one
page plus a cursor, and the frontend sends the cursor back for the next page.
"""

import json

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel

from lazyaws import DynamoDbClient, ResourceNotFoundError, S3Client


class Page(BaseModel):
    """Response model for one page of results"""

    items: list[dict]
    next_cursor: str | None = None
    count: int
    has_more: bool


app = FastAPI(title="lazyaws + FastAPI Example")

dynamodb = DynamoDbClient.from_config()
s3 = S3Client.from_config()


@app.get("/users", response_model=Page)
def list_users(limit: int = 20, cursor: str | None = None) -> Page:
    """List users one page at a time"""
    start_cursor = json.loads(cursor) if cursor else None
    try:
        page = dynamodb.scan(TableName="Users", Limit=limit, start_cursor=start_cursor)
        result = page.to_page_result()
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e

    return Page(
        items=result.items,
        next_cursor=json.dumps(result.next_cursor) if result.has_more else None,
        count=result.count,
        has_more=result.has_more,
    )


@app.get("/users/export")
def export_users() -> list[dict]:
    """Walk every page of the table; the next page is fetched while this one is consumed"""
    return [
        {name: value.to_python() for name, value in item.items()}
        for item in dynamodb.scan(TableName="Users", Limit=100)
    ]


@app.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str) -> None:
    """Delete a user"""
    result = dynamodb.delete_item(
        TableName="Users", Key={"user_id": {"S": user_id}}, ReturnValues="ALL_OLD"
    )
    if not result.attributes:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"User '{user_id}' not found"
        )


@app.get("/files", response_model=Page)
def list_files(bucket: str, prefix: str = "", cursor: str | None = None) -> Page:
    """List objects of a bucket one page at a time"""
    result = s3.list_objects_v2(
        Bucket=bucket, Prefix=prefix, MaxKeys=50, start_cursor=cursor
    ).to_page_result()
    return Page(**result.to_dict())


# Run with: AWS_ENDPOINT_URL=http://localhost:4566 uvicorn main:app --reload
# Visit: http://localhost:8000/docs
