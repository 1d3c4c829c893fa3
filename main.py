import argparse
import json
from pathlib import Path

from cardfolio.api.app import run as run_api
from cardfolio.api.dependencies import get_orchestrator
from cardfolio.config import configure_logging
from cardfolio.schemas.requests import StrategyRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cardfolio unified entrypoint")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["api", "strategy"],
        default="api",
        help="Run mode: api (default), strategy",
    )
    parser.add_argument(
        "--request",
        help="JSON strategy request file (strategy mode)",
    )
    return parser


def run_strategy(request_file: str) -> None:
    configure_logging()
    payload = json.loads(Path(request_file).read_text(encoding="utf-8"))
    response = get_orchestrator().recommend(StrategyRequest.model_validate(payload))
    print(response.model_dump_json(indent=2, by_alias=True))


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.mode == "api":
        run_api()
        return

    if not args.request:
        parser.error("--request is required in strategy mode")
    run_strategy(args.request)


if __name__ == "__main__":
    main()
