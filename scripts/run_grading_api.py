#!/usr/bin/env python3
import argparse
import sys

import uvicorn
from dotenv import load_dotenv
from loguru import logger


def main():
    parser = argparse.ArgumentParser(description="Run Grading API")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=8001, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    load_dotenv()

    # Settings read the environment at import time, after load_dotenv
    from config import config

    logger.remove()
    logger.add(sys.stderr, level=config.log_level)

    logger.info(
        "starting_grading_api",
        host=args.host,
        port=args.port,
        judge_url=config.judge_url,
        judge_poll_budget_seconds=config.judge_poll_budget_seconds,
    )

    uvicorn.run(
        "grading.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
