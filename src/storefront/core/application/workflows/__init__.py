from storefront.core.application.workflows.base_workflow import BaseWorkflow
from storefront.core.application.workflows.compensation import Compensations

__all__ = ["BaseWorkflow", "Compensations"]
