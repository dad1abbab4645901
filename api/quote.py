"""Vercel serverless function for quoting a vote purchase."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add the project root to the path so we can import the awards package
sys.path.insert(0, str(Path(__file__).parent.parent))

from awards.checkout import CheckoutError, prepare_vote
from awards.client import AwardClient, ClientError
from awards.config import Settings, configure_logging
from awards.payloads import PayloadError
from awards.pricing import format_amount

logger = logging.getLogger(__name__)


def handler(request):
    """Handle incoming requests to quote a vote purchase.

    Accepts:
    - POST with JSON body: {"slug": "...", "nominee_id": 12, "quantity": 5}

    Returns JSON with the award's voting phase and the priced order. The
    price is a preview; the backend charges its own figure.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    settings = Settings.from_env()
    configure_logging(settings)

    try:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        data = json.loads(request.body.decode("utf-8"))
        if not isinstance(data, dict):
            return create_response(
                {"error": "Request body must be a JSON object"},
                status=400,
            )
        missing = [k for k in ("slug", "nominee_id", "quantity") if data.get(k) in (None, "")]
        if missing:
            return create_response(
                {"error": f"Missing {', '.join(repr(k) for k in missing)} in request body"},
                status=400,
            )

        with AwardClient(settings) as client:
            award = client.get_award(data["slug"])

        checkout = prepare_vote(
            award,
            data["nominee_id"],
            data["quantity"],
            now=datetime.now(timezone.utc),
        )

        body = checkout.to_dict()
        body["display_total"] = format_amount(checkout.order.total, settings.currency)
        return create_response(body)

    except (CheckoutError, PayloadError) as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except ClientError as e:
        if e.status_code == 404:
            return create_response({"error": "Award not found"}, status=404)
        return create_response(
            {"error": str(e)},
            status=502,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        logger.exception("Unhandled error quoting vote")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
