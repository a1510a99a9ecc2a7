from storefront.core.application.workflows.returns.request_return_workflow import (
    RequestReturnInput,
    RequestReturnWorkflow,
)

__all__ = ["RequestReturnInput", "RequestReturnWorkflow"]
