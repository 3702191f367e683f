from .dropsigner_client import DropSignerClient
from .job_service import JobService, RunSummary

__all__ = ['DropSignerClient', 'JobService', 'RunSummary']
