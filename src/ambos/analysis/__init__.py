from ambos.analysis.base import Analyzer
from ambos.analysis.claude import ClaudeAnalyzer, build_transcript, parse_analysis

__all__ = ["Analyzer", "ClaudeAnalyzer", "build_transcript", "parse_analysis"]
