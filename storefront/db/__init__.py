# Package exports - these allow cleaner imports like:
# from storefront.db import get_table, scan_all
from storefront.db.dynamo import (
    get_table,
    get_s3_client,
    get_notification_client,
    reset_clients,
    scan_all,
    to_item,
    from_item,
    get_item,
    build_update,
)
from storefront.db.tables import create_tables
