"""Client for the LeetCode GraphQL API."""
import random
from enum import Enum
from typing import Optional

import requests

from .config import Config
from .exceptions import LeetCodeError
from .observability import init_observability, traced_function

logger, _ = init_observability('leetcode-bot-leetcode')

RANDOM_QUESTION_QUERY = """
query randomQuestion($categorySlug: String, $filters: QuestionListFilterInput) {
    randomQuestion(categorySlug: $categorySlug, filters: $filters) {
        titleSlug
    }
}"""


class Difficulty(str, Enum):
    """LeetCode question difficulty, valued as the API expects it."""
    EASY = 'EASY'
    MEDIUM = 'MEDIUM'
    HARD = 'HARD'

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['Difficulty']:
        """Case-insensitive lookup; None for empty or unknown values."""
        if not value:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


def random_difficulty() -> Difficulty:
    """Pick a difficulty uniformly at random."""
    return random.choice(list(Difficulty))


class LeetCodeClient:
    """LeetCode API client."""

    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        self.base_url = (base_url or Config.LEETCODE_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else Config.LEETCODE_TIMEOUT
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        """Close the HTTP session if this client opened it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def graphql_url(self) -> str:
        return f"{self.base_url}/graphql"

    def problem_url(self, title_slug: str) -> str:
        """Public link to a problem."""
        return f"{self.base_url}/problems/{title_slug}"

    @traced_function("leetcode_random_question")
    def random_question(self, difficulty: Difficulty) -> str:
        """Fetch a random question of the given difficulty.

        Returns:
            The question's title slug

        Raises:
            LeetCodeError: the request failed or no question came back
        """
        payload = {
            'query': RANDOM_QUESTION_QUERY,
            'variables': {
                'categorySlug': '',
                'filters': {
                    'difficulty': Difficulty(difficulty).value
                }
            }
        }
        headers = {
            'Content-Type': 'application/json',
            'Origin': self.base_url,
            'Referer': self.base_url
        }

        try:
            response = self.session.post(self.graphql_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise LeetCodeError(f"LeetCode request failed: {e}") from e

        if not response.ok:
            logger.warning(
                "LeetCode responded with unexpected status",
                status_code=response.status_code,
                response_text=response.text[:200]
            )
            raise LeetCodeError(
                f"LeetCode responded with status {response.status_code}",
                status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise LeetCodeError("LeetCode returned an invalid JSON body") from e

        if not isinstance(body, dict):
            raise LeetCodeError("LeetCode returned an unexpected payload")

        if body.get('errors'):
            messages = [err.get('message', '') for err in body['errors'] if isinstance(err, dict)]
            raise LeetCodeError(f"LeetCode GraphQL errors: {'; '.join(messages) or body['errors']}")

        question = (body.get('data') or {}).get('randomQuestion') or {}
        title_slug = question.get('titleSlug')
        if not title_slug:
            raise LeetCodeError("LeetCode returned no question")

        logger.info("Fetched random question", difficulty=Difficulty(difficulty).value, title_slug=title_slug)
        return title_slug
