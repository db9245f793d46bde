"""Single HTTP GET with JSON decoding into a typed destination."""

import logging
from typing import Any, Dict

import requests
from pydantic import TypeAdapter, ValidationError
from requests import PreparedRequest, RequestException, Response

from electricitymap.exceptions import DecodeError, HTTPStatusError, RequestConstructionError, TransportError


logger = logging.getLogger(__name__)


def _prepare(url: str, headers: Dict[str, str], params: Dict[str, str]) -> PreparedRequest:
    try:
        return requests.Request("GET", url, headers=headers, params=params).prepare()
    except (RequestException, ValueError) as exc:
        logger.error("Could not build request for %s: %s", url, exc)
        raise RequestConstructionError(str(exc)) from exc


def _send(request: PreparedRequest) -> Response:
    try:
        with requests.Session() as session:
            settings = session.merge_environment_settings(request.url, {}, None, None, None)
            return session.send(request, **settings)
    except RequestException as exc:
        logger.error("Electricity Maps request error: %s", exc)
        raise TransportError(str(exc)) from exc


def http_get(url: str, headers: Dict[str, str], params: Dict[str, str], destination: Any) -> Any:
    """GET ``url`` once and decode the JSON body as ``destination``.

    ``destination`` is any type pydantic can validate against, e.g. a model
    class or ``Dict[str, Zone]``.

    Raises:
        RequestConstructionError: the URL or parameters do not form a request.
        TransportError: the request failed before a response arrived.
        HTTPStatusError: the response status was not 200.
        DecodeError: the body is not valid JSON for ``destination``.
    """
    request = _prepare(url, headers, params)
    response = _send(request)

    if response.status_code != 200:
        logger.error("Electricity Maps returned %s %s for %s", response.status_code, response.reason, url)
        raise HTTPStatusError(response.status_code, response.reason)

    try:
        return TypeAdapter(destination).validate_json(response.content)
    except ValidationError as exc:
        logger.error("Could not decode Electricity Maps response from %s: %s", url, exc)
        raise DecodeError(str(exc)) from exc
