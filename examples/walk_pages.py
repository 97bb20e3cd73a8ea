"""
Walking paginated results.

Shows the three ways of consuming a paginated result:
- iterating items across every page
- iterating pages
- reading only the current page and resuming later from a cursor
"""

import logging

from lazyaws import ClientConfig, DynamoDbClient, SqsClient

logging.basicConfig(level=logging.INFO)
logging.getLogger("lazyaws").setLevel(logging.DEBUG)

config = ClientConfig.from_env()
dynamodb = DynamoDbClient.from_config(config)
sqs = SqsClient.from_config(config)

# 1. Every item of every page. The next page is requested before the
#    current page is handed out, so its round trip overlaps with this loop.
for item in dynamodb.scan(TableName="Orders", Limit=25):
    print(item["order_id"].value)

# 2. Page by page
result = dynamodb.query(
    TableName="Orders",
    KeyConditionExpression="customer_id = :c",
    ExpressionAttributeValues={":c": {"S": "customer-42"}},
    Limit=10,
)
for page in result.pages():
    print(f"{page.count} orders, capacity: {page.consumed_capacity}")

# 3. Stop early: the pending prefetch is cancelled and nothing else is sent
items = iter(dynamodb.scan(TableName="Orders", Limit=25))
first = next(items, None)
items.close()

# 4. One page now, the rest later
page = dynamodb.scan(TableName="Orders", Limit=25).to_page_result()
if page.has_more:
    later = dynamodb.scan(TableName="Orders", Limit=25, start_cursor=page.next_cursor)

# Tokens work the same way for other services
for url in sqs.list_queues(QueueNamePrefix="orders-", MaxResults=10):
    print(url)

dynamodb.close()
sqs.close()
