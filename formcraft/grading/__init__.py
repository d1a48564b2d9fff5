from .scorer import GradeResult, grade
from .aggregator import grade_submission, submit_response
from .stats import compute_stats
