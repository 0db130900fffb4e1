from .scan_result import ScanResult, Verdict

__all__ = ["ScanResult", "Verdict"]
