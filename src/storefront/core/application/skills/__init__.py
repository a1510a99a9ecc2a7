from storefront.core.application.skills.skill import BaseSkill

__all__ = ["BaseSkill"]
