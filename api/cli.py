#!/usr/bin/env python3
"""
SAILCAST API CLI Tool.

Command-line interface for running and exercising the service:
- Serve the API with uvicorn
- Build one forecast and print the JSON payload

Usage:
    python -m api.cli serve --port 8000
    python -m api.cli forecast --lat -37.8676 --lon 144.9741 --days 3
"""
import argparse
import asyncio
import json
import sys
from typing import Optional


def serve(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> None:
    """Run the API under uvicorn."""
    import uvicorn
    from api.config import settings

    uvicorn.run(
        "api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level,
    )


def print_forecast(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    days: Optional[str] = None,
) -> None:
    """Fetch and print one forecast payload."""
    from api.config import settings
    from sailcast.errors import ForecastError
    from sailcast.forecast.pipeline import build_forecast_payload
    from sailcast.forecast.request import resolve_request

    try:
        coordinate, forecast_days = resolve_request(
            lat,
            lon,
            days,
            default_lat=settings.default_latitude,
            default_lon=settings.default_longitude,
            default_days=settings.default_forecast_days,
            max_days=settings.max_forecast_days,
        )
        payload = asyncio.run(
            build_forecast_payload(coordinate, forecast_days, config=settings.upstream_config())
        )
    except ForecastError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="SAILCAST API CLI Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Bind address (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Forecast command
    forecast_parser = subparsers.add_parser("forecast", help="Print one forecast as JSON")
    forecast_parser.add_argument("--lat", help="Latitude (default: St Kilda)")
    forecast_parser.add_argument("--lon", help="Longitude")
    forecast_parser.add_argument("--days", help="Forecast days, 1-16 (default: 7)")

    args = parser.parse_args()

    if args.command == "serve":
        serve(host=args.host, port=args.port, reload=args.reload)
    elif args.command == "forecast":
        print_forecast(lat=args.lat, lon=args.lon, days=args.days)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
