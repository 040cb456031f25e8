"""
Elle agent tool: a two-agent reasoning workflow on a remote LangGraph deployment.

Two agents answer the user's question separately, then score each other and
suggest improvements. The call is a two-stage protocol:

1. create a thread on the deployment (the thread id correlates the run)
2. invoke the ``elle_agent`` graph on that thread with one human message

The last entry of the graph's ``answers`` state is returned. If stage 2 fails
the thread is left behind on the deployment; nothing retries.
"""

import logging
from typing import Any, Dict, List

import httpx
from langgraph.pregel.remote import RemoteGraph
from langgraph_sdk import get_sync_client

from config.config import Settings
from models.errors import ConfigurationError, NetworkError, ProtocolError, RemoteHttpError
from models.schemas import ToolDescriptor
from tools.backend import to_json_text
from tools.validation import require_non_empty_string

logger = logging.getLogger(__name__)

ELLE_GRAPH_ID = "elle_agent"

INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "input": {
            "type": "string",
            "minLength": 1,
            "description": "Requirements or questions from the user.",
        },
    },
    "required": ["input"],
}

ELLE_AGENT_TOOL = ToolDescriptor(
    name="Elle_Agent_Tool",
    description="Let two agents answer a question from the user separately, give a score and a suggestion.",
    input_schema=INPUT_SCHEMA,
)


def validate_elle_arguments(arguments: Dict[str, Any]) -> None:
    require_non_empty_string(arguments, "input")


def _extract_answers(response: Any) -> List[Any]:
    if isinstance(response, dict):
        answers = response.get("answers")
    else:
        answers = getattr(response, "answers", None)
    if not isinstance(answers, list) or not answers:
        raise ProtocolError("Remote agent returned no answers")
    return answers


def invoke_elle_agent(settings: Settings, _api_key: str, arguments: Dict[str, Any]) -> str:
    """
    Run the remote Elle graph for ``arguments["input"]``.

    The deployment authenticates with REMOTE_LANGSMITH_API_KEY.

    Returns:
        JSON text of ``[{"answer": "<last answer as JSON>"}]``
    """
    if not settings.remote_deployment_url:
        raise ConfigurationError("REMOTE_DEPLOYMENT_URL not set")

    client = get_sync_client(
        url=settings.remote_deployment_url,
        api_key=settings.remote_api_key or None,
        timeout=settings.request_timeout,
    )
    remote_graph = RemoteGraph(ELLE_GRAPH_ID, sync_client=client)

    try:
        thread = client.threads.create()
        thread_id = thread["thread_id"]
        logger.info(f"Elle agent: created thread {thread_id}")

        config = {"configurable": {"thread_id": thread_id}}
        response = remote_graph.invoke(
            {"messages": [{"role": "human", "content": arguments["input"]}]},
            config=config,
        )
    except httpx.HTTPStatusError as e:
        logger.error(f"Elle agent: deployment answered {e.response.status_code}")
        raise RemoteHttpError(e.response.status_code, e.response.reason_phrase) from e
    except httpx.TransportError as e:
        logger.error(f"Elle agent: cannot reach deployment: {e}")
        raise NetworkError(f"Request to remote deployment failed: {e}") from e
    finally:
        client.close()

    answers = _extract_answers(response)
    logger.info(f"Elle agent: received {len(answers)} answers on thread {thread_id}")
    return to_json_text([{"answer": to_json_text(answers[-1])}])
