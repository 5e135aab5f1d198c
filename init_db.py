import argparse
import asyncio
import logging

from aacshare.app.db import init_models

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create AAC Share database tables")
    # Drops every table first - DEV MODE ONLY
    parser.add_argument("--drop", action="store_true", help="drop existing tables before creating")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_models(drop=args.drop))
    print(">>> Tables Created Successfully!")
