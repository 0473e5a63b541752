from __future__ import annotations

from .constants import DEFAULT_NODE_URL
from .service import FERSubmission

_RULE = "*" * 99 + "\n"


def _curl(body: str, node_url: str) -> str:
    return (
        "    curl -i -X POST -H 'Content-Type: application/json' "
        f"-d '{body}' {node_url}\n"
    )


def render_curl_report(submission: FERSubmission, node_url: str = DEFAULT_NODE_URL) -> str:
    """Warning banner plus the curl commands that submit the commit and the reveal."""
    parts = [
        _RULE,
        "*\n",
        "*   WARNING:  You are making an FERChain entry with the following data:\n",
        "*\n",
        f"*      {submission.commit_json}\n",
        "*   Implied factoid price:\n",
        "*\n",
        f"*      ${submission.implied_price:.2f}\n",
        _RULE,
        "\n",
        f"Entry Credit Address that pays for this Entry: {submission.ec_address}\n",
        _RULE,
        "\n",
        _curl(submission.commit_json, node_url),
        "\n",
        _curl(submission.reveal_json, node_url),
        "\n",
    ]
    return "".join(parts)
