from typing import Any, Callable, Dict, List, Mapping

from agents.elle_agent import ELLE_AGENT_TOOL, invoke_elle_agent, validate_elle_arguments
from config.config import Settings
from models.schemas import ToolDescriptor
from tools.esg_search import SEARCH_ESG_TOOL, search_esg, validate_esg_arguments
from tools.sci_search import SEARCH_SCI_TOOL, search_sci, validate_sci_arguments

Validator = Callable[[Dict[str, Any]], None]
Adapter = Callable[[Settings, str, Dict[str, Any]], str]


class ToolSpec:
    def __init__(
        self,
        descriptor: ToolDescriptor,
        validate: Validator,
        invoke: Adapter,
    ):
        self.descriptor = descriptor
        self.validate = validate
        self.invoke = invoke

    @property
    def name(self) -> str:
        return self.descriptor.name


# Insertion order is the order tools/list advertises
TOOL_REGISTRY: Dict[str, ToolSpec] = {}


def register_tool(spec: ToolSpec, registry: Dict[str, ToolSpec] = TOOL_REGISTRY) -> None:
    if spec.name in registry:
        raise ValueError(f"Tool '{spec.name}' is already registered")
    registry[spec.name] = spec


def live_tool_names(settings: Settings, registry: Mapping[str, ToolSpec] = TOOL_REGISTRY) -> List[str]:
    """
    Names of the tools this process serves, in registration order.

    ENABLED_TOOLS picks the set explicitly. Otherwise the search tools are
    always live and the agent tool is live once a remote deployment is
    configured.

    Raises:
        RuntimeError: If ENABLED_TOOLS names a tool that does not exist.
    """
    if settings.enabled_tools:
        unknown = [name for name in settings.enabled_tools if name not in registry]
        if unknown:
            raise RuntimeError(f"ENABLED_TOOLS names unknown tools: {unknown}")
        return [name for name in registry if name in settings.enabled_tools]

    names = [name for name in registry if name != ELLE_AGENT_TOOL.name]
    if settings.remote_deployment_url and ELLE_AGENT_TOOL.name in registry:
        names.append(ELLE_AGENT_TOOL.name)
    return names


register_tool(ToolSpec(SEARCH_ESG_TOOL, validate_esg_arguments, search_esg))
register_tool(ToolSpec(SEARCH_SCI_TOOL, validate_sci_arguments, search_sci))
register_tool(ToolSpec(ELLE_AGENT_TOOL, validate_elle_arguments, invoke_elle_agent))
