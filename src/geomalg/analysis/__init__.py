from .roundtrip import audit_round_trip, run_audit, summarize, sweep_angles, write_report

__all__ = ["audit_round_trip", "run_audit", "summarize", "sweep_angles", "write_report"]
