"""
Dispatch Context
Per-request state shared by the dispatcher and the hooks it triggers
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pyweave.hooks.hook_manager import HaltState


@dataclass
class DispatchContext:
    """
    State of one request's pass through the dispatcher

    Hooks receive it as data['context']. Headers added to response_headers
    are applied to whatever response the request ends with.
    """
    method: str
    uri: str
    request: Any = None
    halt_state: HaltState = field(default_factory=HaltState)
    route: Any = None
    controller: Optional[str] = None
    action: Optional[str] = None
    controller_instance: Any = None
    params: List[str] = field(default_factory=list)
    named_params: Dict[str, str] = field(default_factory=dict)
    response: Any = None
    response_headers: Dict[str, str] = field(default_factory=dict)

    @property
    def halted(self) -> bool:
        return self.halt_state.halted

    @property
    def matched_route(self):
        return self.route

    def base_data(self, **extra) -> Dict[str, Any]:
        """Data dict passed to hooks: HTTP method, uri, request and this context"""
        data = {
            'method': self.method,
            'uri': self.uri,
            'request': self.request,
            'context': self,
        }
        data.update(extra)
        return data
