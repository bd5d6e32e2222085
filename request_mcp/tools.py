"""
Tool layer - the four operations exposed to the calling agent.

Every operation returns text. Failures are reported in the text itself,
never raised, so the agent always gets a readable answer.
"""
import json
import logging

from request_mcp.errors import (
    ArgumentFormatError,
    MissingParameterError,
    NotFoundError,
    RequestProxyError,
)
from request_mcp.resolver import resolve_request

log = logging.getLogger(__name__)


class ApiTools:
    def __init__(self, store, client):
        self.store = store
        self.client = client

    def before_request(self) -> str:
        """List available templates (id, name, description, params)."""
        try:
            return json.dumps(self.store.list(), indent=2, ensure_ascii=False)
        except Exception as e:
            log.exception("Failed to list API templates")
            return f"Failed to get API list: {e}"

    def register_api(self, config: str) -> str:
        try:
            try:
                template = json.loads(config)
            except (TypeError, ValueError) as e:
                raise ArgumentFormatError(str(e)) from e
            registered = self.store.register(template)
        except ArgumentFormatError as e:
            log.warning("register_api: %s", e)
            return f"Failed to register API: {e}"
        except RequestProxyError as e:
            log.warning("register_api: %s", e)
            return str(e)
        except Exception as e:
            log.exception("register_api failed")
            return f"Failed to register API: {e}"
        return f"Successfully registered API: {registered['name']}"

    def delete_api(self, id: str) -> str:
        try:
            self.store.remove(id)
        except RequestProxyError as e:
            log.warning("delete_api: %s", e)
            return str(e)
        except Exception as e:
            log.exception("delete_api failed")
            return f"Failed to delete API: {e}"
        return f"Successfully deleted API: {id}"

    def request(self, id: str, args: str) -> str:
        """Resolve template `id` with `args` and return the upstream JSON body."""
        try:
            template = self.store.get(id)
            if template is None:
                raise NotFoundError(id)
            resolved = resolve_request(template, args)
            log.info("request %s -> %s %s", id, resolved.method, resolved.url)
            data = self.client.send(resolved)
        except ArgumentFormatError as e:
            log.warning("request %s: bad args: %s", id, e)
            return f"Parameter format error: {e}"
        except (NotFoundError, MissingParameterError) as e:
            log.warning("request %s: %s", id, e)
            return str(e)
        except RequestProxyError as e:
            log.warning("request %s failed: %s", id, e)
            return f"Error processing request: {e}"
        except Exception as e:
            log.exception("request %s failed", id)
            return f"Error processing request: {e}"
        return json.dumps(data, indent=2, ensure_ascii=False)
