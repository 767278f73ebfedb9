"""
Hierarchical visibility package.

This package decides which records a signed-in user may see and summarizes them:
- Scope resolution over the org reporting graph
- Job assignment visibility (lead and team recruiters)
- Record filtering with user-entered criteria
- Summary counts, funnels and per-job metrics
- Date-range reports and end-to-end listings
"""

from visibility.org_graph import OrgGraph

from visibility.roles import (
    FULL_SCOPE_ROLES,
    REPORTEE_CHAINS,
    ScopePolicy,
)

from visibility.scope import resolve_scope

from visibility.assignment import expand_by_assignment

from visibility.filters import (
    filter_records,
    is_visible,
    job_title_options,
    client_options,
    stage_options,
)

from visibility.aggregation import (
    FunnelStage,
    JobMetrics,
    RecordSummary,
    aggregate,
    conversion_rate,
    funnel,
    job_metrics,
    job_performance,
    safe_ratio,
)

from visibility.reporting import (
    Report,
    build_report,
    status_timestamp,
)

from visibility.pipeline import (
    LeaveBoard,
    leave_board,
    visible_candidates,
    visible_jobs,
)

__all__ = [
    # Org graph
    "OrgGraph",
    # Rules
    "FULL_SCOPE_ROLES",
    "REPORTEE_CHAINS",
    "ScopePolicy",
    # Resolution
    "resolve_scope",
    "expand_by_assignment",
    # Filtering
    "filter_records",
    "is_visible",
    "job_title_options",
    "client_options",
    "stage_options",
    # Aggregation
    "FunnelStage",
    "JobMetrics",
    "RecordSummary",
    "aggregate",
    "conversion_rate",
    "funnel",
    "job_metrics",
    "job_performance",
    "safe_ratio",
    # Reporting
    "Report",
    "build_report",
    "status_timestamp",
    # Pipeline
    "LeaveBoard",
    "leave_board",
    "visible_candidates",
    "visible_jobs",
]
