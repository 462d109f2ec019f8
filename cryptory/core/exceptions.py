"""Exception hierarchy for the coin and issue services.

Every exception carries an HTTP-equivalent ``status_code`` so the API layer
can render it without knowing the concrete type, and an optional
``context`` dict for structured log metadata.
"""
from typing import Any, Dict, Optional


class CryptoryError(Exception):
    """Base exception for all service errors."""

    status_code = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class NotFoundError(CryptoryError):
    """Requested coin or issue does not exist."""

    status_code = 404


class ValidationFailure(CryptoryError):
    """Request violates a business rule or carries malformed input."""

    status_code = 400


class UpstreamFailure(CryptoryError):
    """Ticker or news provider failed or returned unusable data.

    Not retried by the services.
    """

    status_code = 502


class DataIntegrityGap(CryptoryError):
    """Stored data cannot satisfy a presentation precondition."""

    status_code = 409


class CoinNotFound(NotFoundError):
    """No coin with the given id.

    Context keys:
        coin_id: int
    """

    def __init__(self, coin_id: int):
        super().__init__(f"해당 코인을 찾을 수 없습니다. ID: {coin_id}", {"coin_id": coin_id})


class IssueNotFound(NotFoundError):
    """No visible issue with the given id.

    Context keys:
        issue_id: int
    """

    def __init__(self, issue_id: int):
        super().__init__(f"해당 이슈를 찾을 수 없습니다. ID: {issue_id}", {"issue_id": issue_id})


class InvalidAuthorId(ValidationFailure):
    """Author id header is not a numeric user id."""

    def __init__(self, author_id: Any):
        super().__init__("잘못된 관리자 ID 형식입니다.", {"author_id": author_id})


class DisplayLimitExceeded(ValidationFailure):
    """Turning a coin on would push the displayed set above the cap."""

    def __init__(self, limit: int):
        super().__init__(
            f"메인 페이지에 노출 가능한 코인 수({limit}개)를 초과했습니다.",
            {"limit": limit},
        )


class UpstreamError(UpstreamFailure):
    """HTTP call to an external provider failed.

    Context keys:
        provider: "upbit" or "naver"
    """


class NewsDateParseError(UpstreamFailure):
    """A news item carried a publish date that could not be parsed."""

    def __init__(self, pub_date: Any):
        super().__init__(f"뉴스 날짜 형식을 해석할 수 없습니다: {pub_date!r}", {"pub_date": pub_date})


class NoDisplayableCoins(DataIntegrityGap):
    """No coin is flagged for the public front page."""

    def __init__(self):
        super().__init__("노출 중인 코인이 없습니다.")


class NoChartData(DataIntegrityGap):
    """Coin exists but has no stored chart history."""

    def __init__(self, coin_id: int):
        super().__init__(f"차트 데이터가 없습니다. 코인 ID: {coin_id}", {"coin_id": coin_id})
