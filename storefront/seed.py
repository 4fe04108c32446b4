#!/usr/bin/env python3
"""
Prepare a storefront environment.

This script can:
1. Create any missing DynamoDB tables
2. Seed categories (stored under their slug path)
3. Create or reset the admin user (bcrypt-hashed password)

Usage:
    storefront-seed --create-tables \
        --categories "Home Decor, Wall Art" \
        --admin-user admin --admin-password 'change-me'
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_table
from storefront.db.tables import create_tables
from storefront.services.auth_service import MAX_PASSWORD_BYTES, AuthService
from storefront.utils import slugify

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def seed_categories(names: List[str]) -> List[dict]:
    """Put one category row per name and return the rows written"""
    table = get_table(settings.categories_table)
    rows = []
    for name in names:
        path = slugify(name)
        if not path:
            logger.warning(f"Skipping category with empty slug: {name!r}")
            continue
        table.put_item(Item={"path": path, "name": name})
        logger.info(f"  Category: {name} -> {path}")
        rows.append({"path": path, "name": name})
    return rows


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Create tables, seed categories and set the admin user',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    storefront-seed --create-tables \\
        --categories "Home Decor, Wall Art" \\
        --admin-user admin --admin-password "change-me"
        """
    )
    parser.add_argument('--create-tables', action='store_true', help='Create missing DynamoDB tables')
    parser.add_argument('--categories', help='Comma-separated category names to add')
    parser.add_argument('--admin-user', help='Admin username to create or reset')
    parser.add_argument('--admin-password', help='Password for --admin-user')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if bool(args.admin_user) != bool(args.admin_password):
        parser.error('--admin-user and --admin-password must be given together')
    if args.admin_password and len(args.admin_password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        parser.error(f'--admin-password must be at most {MAX_PASSWORD_BYTES} bytes')
    if not (args.create_tables or args.categories or args.admin_user):
        parser.error('nothing to do: pass --create-tables, --categories or --admin-user')

    started = time.time()
    logger.info("=" * 70)
    logger.info(f"STOREFRONT SEED ({settings.environment}, {settings.aws_region})")
    logger.info("=" * 70)

    created_tables: List[str] = []
    categories: List[dict] = []
    try:
        if args.create_tables:
            logger.info("Creating tables...")
            created_tables = create_tables()

        if args.categories:
            logger.info("Seeding categories...")
            categories = seed_categories([c.strip() for c in args.categories.split(",") if c.strip()])

        if args.admin_user:
            logger.info("Setting admin user...")
            AuthService().set_admin_user(args.admin_user, args.admin_password)
    except ClientError as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    logger.info("=" * 70)
    logger.info("SEED SUMMARY")
    logger.info(f"  Tables created: {len(created_tables)}")
    logger.info(f"  Categories written: {len(categories)}")
    logger.info(f"  Admin user: {args.admin_user or '-'}")
    logger.info(f"  Took {time.time() - started:.1f}s")
    logger.info("=" * 70)
    return 0


if __name__ == '__main__':
    sys.exit(main())
