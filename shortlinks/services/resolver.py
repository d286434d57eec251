import logging
from collections.abc import Callable

from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.exceptions import AliasConflictError, GenerationExhaustedError
from shortlinks.models import ShortenerPolicy
from shortlinks.services.generator import generate_shortcode


logger = logging.getLogger(__name__)


class UniquenessResolver:
    """Pick a shortcode that is currently free in the data store.

    The check is advisory: it is not atomic against concurrent writers.
    Callers must still rely on ShortLinkBaseDAO.insert() rejecting taken
    shortcodes.
    """

    def __init__(
        self,
        dao: ShortLinkBaseDAO,
        policy: ShortenerPolicy | None = None,
        generator: Callable[[int], str] = generate_shortcode,
    ):
        self.dao = dao
        self.policy = policy or ShortenerPolicy()
        self.generator = generator

    def reserve(self, candidate: str | None = None) -> str:
        """Return a free shortcode.

        Args:
            candidate (str | None):
                Custom alias requested by the caller. Returned unchanged when free.

        Raises:
            AliasConflictError:
                If the custom alias is already taken.
            GenerationExhaustedError:
                If no free code was generated within policy.max_attempts.
        """
        if candidate is not None:
            if self.dao.exists(candidate):
                raise AliasConflictError(candidate)
            return candidate

        for attempt in range(1, self.policy.max_attempts + 1):
            shortcode = self.generator(self.policy.code_length)
            if not self.dao.exists(shortcode):
                return shortcode
            logger.warning('Generated shortcode collided with an existing link.', extra={'shortcode': shortcode, 'attempt': attempt})

        raise GenerationExhaustedError(message=f'No free shortcode found after {self.policy.max_attempts} attempts.')
