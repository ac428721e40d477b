"""Submission consumers for committed forms.

A submitter is any callable taking the serialized ``{name: value}`` mapping.
The console submitter pretty-prints it; ``HttpSubmitter`` POSTs it as JSON.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx

from formtree.config import Config
from formtree.utils import console

Submitter = Callable[[dict[str, Any]], Any]


def console_submitter(results: dict[str, Any]) -> None:
    """Print the committed mapping as indented JSON."""
    console.print_json(json.dumps(results))


class HttpSubmitter:
    """POST committed mappings to *url* as a JSON body.

    A caller-supplied ``httpx.Client`` is used as-is (and not closed), which
    lets tests inject an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._client = client

    def __call__(self, results: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            response = self._client.post(self.url, json=results)
        else:
            with httpx.Client(timeout=httpx.Timeout(self.timeout)) as client:
                response = client.post(self.url, json=results)
        response.raise_for_status()
        console.print(f"[green]Submitted {len(results)} field(s) to {self.url}[/green]")
        return response


def submitter_from_config(config: Config) -> Submitter:
    """HTTP submitter when ``config.submit_url`` is set, else the console one."""
    if config.submit_url:
        return HttpSubmitter(config.submit_url, timeout=config.submit_timeout)
    return console_submitter
