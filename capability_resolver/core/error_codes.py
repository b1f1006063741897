"""Gardener error codes reported on shoot conditions and last errors."""

from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field


class ErrorCode(BaseModel):
    code: str
    short_description: str
    description: str
    temporary_error: bool = False
    user_error: bool = False
    infra_account_error: bool = False


class LastError(BaseModel):
    description: Optional[str] = None
    codes: List[str] = Field(default_factory=list)


def _error_code(code: str, short_description: str, description: str, **flags: bool) -> ErrorCode:
    return ErrorCode(code=code, short_description=short_description, description=description, **flags)


ERROR_CODES: Dict[str, ErrorCode] = {
    error.code: error
    for error in [
        _error_code(
            "ERR_INFRA_UNAUTHORIZED",
            "Invalid Credentials",
            "Invalid cloud provider credentials.",
            user_error=True,
            infra_account_error=True,
        ),
        _error_code(
            "ERR_INFRA_INSUFFICIENT_PRIVILEGES",
            "Insufficient Privileges",
            "Cloud provider credentials have insufficient privileges.",
            user_error=True,
            infra_account_error=True,
        ),
        _error_code(
            "ERR_INFRA_QUOTA_EXCEEDED",
            "Quota Exceeded",
            "Cloud provider quota exceeded. Please request limit increases.",
            user_error=True,
            infra_account_error=True,
        ),
        _error_code(
            "ERR_INFRA_DEPENDENCIES",
            "Infrastructure Dependencies",
            "Infrastructure operation failed as unmanaged resources exist in your cloud provider "
            "account. Please delete all manually created resources related to this Shoot.",
            user_error=True,
            infra_account_error=True,
        ),
        _error_code(
            "ERR_CLEANUP_CLUSTER_RESOURCES",
            "Cleanup Cluster",
            "Cleaning up the cluster failed as some resource are stuck in deletion. Please remove "
            "these resources properly or a forceful deletion will happen if this error persists.",
            user_error=True,
        ),
        _error_code(
            "ERR_INFRA_RESOURCES_DEPLETED",
            "Infrastructure Resources Depleted",
            "The underlying infrastructure provider proclaimed that it does not have enough "
            "resources to fulfill your request at this point in time. You might want to wait or "
            "change your shoot configuration.",
            user_error=True,
            infra_account_error=True,
        ),
        _error_code(
            "ERR_CONFIGURATION_PROBLEM",
            "Configuration Problem",
            "There is a configuration problem that is most likely caused by your Shoot "
            "specification. Please double-check the error message and resolve the problem.",
            user_error=True,
        ),
        _error_code(
            "ERR_RETRYABLE_CONFIGURATION_PROBLEM",
            "Configuration Problem",
            "There is a configuration problem. Please double-check the error message and resolve the problem.",
            user_error=True,
        ),
        _error_code(
            "ERR_INFRA_RATE_LIMITS_EXCEEDED",
            "Rate Limit Exceeded",
            "Cloud provider rate limit exceeded. The operation will be retried automatically.",
            temporary_error=True,
        ),
        _error_code(
            "ERR_RETRYABLE_INFRA_DEPENDENCIES",
            "Retryable Infrastructure Error",
            "Error occurred due to dependent objects on the infrastructure level. The operation "
            "will be retried automatically.",
            temporary_error=True,
        ),
    ]
}


def error_codes_from_array(errors: Iterable[LastError]) -> List[str]:
    """Unique error codes of several last errors, in order of appearance."""
    codes: List[str] = []
    for error in errors:
        for code in error.codes:
            if code and code not in codes:
                codes.append(code)
    return codes


def objects_from_error_codes(codes: Iterable[str]) -> List[ErrorCode]:
    """Look up error codes; unknown codes get a generic description."""
    return [
        ERROR_CODES.get(code)
        or ErrorCode(code=code, short_description=f"Error Code: {code}", description=f"Error Code: {code}")
        for code in codes
    ]


def is_user_error(codes: Optional[List[str]]) -> bool:
    if not codes:
        return False
    return any(error.user_error for error in objects_from_error_codes(codes))


def is_temporary_error(codes: Optional[List[str]]) -> bool:
    if not codes:
        return False
    return any(error.temporary_error for error in objects_from_error_codes(codes))


def is_infra_account_error(codes: Optional[List[str]]) -> bool:
    if not codes:
        return False
    return any(error.infra_account_error for error in objects_from_error_codes(codes))
