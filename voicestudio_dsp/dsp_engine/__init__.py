"""Enhancement engine for VoiceStudio.

This package contains the restoration, tone and dynamics stages and the
pipeline that runs them in a fixed order from an ``EnhancementConfig``.
"""
from .pipeline import (
  EnhancementConfig,
  EnhancementReport,
  STAGE_ORDER,
  StageId,
  build_chain,
  enhance,
  enhance_with_report,
  run_chain,
)

__all__ = [
  "EnhancementConfig",
  "EnhancementReport",
  "STAGE_ORDER",
  "StageId",
  "build_chain",
  "enhance",
  "enhance_with_report",
  "run_chain",
]
