"""Matrix editor - drives one edit lifecycle over an EditSession.

Loading -> Ready(noChanges) <-> Ready(hasChanges) -> Saving -> Ready(noChanges)
Ready(hasChanges) -> ConfirmingDiscard -> Ready(noChanges)
any -> Error on load/save failure; retry() recovers.
"""

import logging
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.dto.permission_dto import UserPermissions
from permatrix.application.use_cases.permission.load_matrix import LoadUserMatrixUseCase
from permatrix.application.use_cases.permission.save_direct_grants import (
    SaveDirectGrantsUseCase,
)
from permatrix.domain.edit_session import EditSession
from permatrix.domain.exceptions import Conflict, ValidationFailure
from permatrix.domain.value_objects import EditPhase, can_transition

logger = logging.getLogger(__name__)


class MatrixEditor:
    """Stateful wrapper for one user's matrix edit, scoped to one caller."""

    def __init__(
        self,
        load_matrix: LoadUserMatrixUseCase,
        save_direct_grants: SaveDirectGrantsUseCase,
        actor: AuthContext,
        user_id: UUID,
    ) -> None:
        self._load = load_matrix
        self._save = save_direct_grants
        self._actor = actor
        self._user_id = user_id
        self.phase = EditPhase.LOADING
        self.data: UserPermissions | None = None
        self.session: EditSession | None = None
        self.error: Exception | None = None

    @property
    def has_changes(self) -> bool:
        return self.session is not None and self.session.has_changes

    def _move(self, target: EditPhase) -> None:
        if self.phase is not target and not can_transition(self.phase, target):
            raise ValidationFailure(f"Cannot go from {self.phase} to {target}")
        self.phase = target

    def _fail(self, error: Exception) -> None:
        self.error = error
        self.phase = EditPhase.ERROR

    def _ready(self, data: UserPermissions, session: EditSession) -> EditSession:
        self.data = data
        self.session = session
        self.error = None
        self._move(EditPhase.READY)
        return self.session

    async def _fetch(self) -> UserPermissions:
        self._move(EditPhase.LOADING)
        try:
            return await self._load.execute(self._actor, self._user_id)
        except Exception as e:
            logger.warning("Loading permissions of user %s failed: %s", self._user_id, e)
            self._fail(e)
            raise

    def _editing(self) -> EditSession:
        if self.phase is not EditPhase.READY or self.session is None:
            raise ValidationFailure(f"Matrix is not editable while {self.phase}")
        return self.session

    async def open(self) -> EditSession:
        """Load the user's matrix and start a fresh session."""
        data = await self._fetch()
        return self._ready(data, EditSession.open(data.catalog, data.resolved))

    def toggle_one(self, name: str) -> EditSession:
        self.session = self._editing().toggle_one(name)
        return self.session

    def toggle_module(self, module_key: str) -> EditSession:
        self.session = self._editing().toggle_module(module_key)
        return self.session

    def toggle_action(self, action_key: str) -> EditSession:
        self.session = self._editing().toggle_action(action_key)
        return self.session

    async def save(self) -> EditSession:
        """Persist the selection; on failure the pending selection is kept."""
        session = self.session
        if session is None:
            raise ValidationFailure("Nothing to save before the matrix is loaded")
        self._move(EditPhase.SAVING)
        try:
            data = await self._save.execute(
                self._actor,
                self._user_id,
                session.submission(),
                expected_inherited=session.inherited,
            )
        except Exception as e:
            logger.warning("Saving permissions of user %s failed: %s", self._user_id, e)
            self._fail(e)
            raise
        return self._ready(data, EditSession.open(data.catalog, data.resolved))

    def request_discard(self) -> bool:
        """Ask to discard; returns True when confirmation is needed."""
        if not self.has_changes:
            return False
        self._editing()
        self._move(EditPhase.CONFIRMING_DISCARD)
        return True

    def confirm_discard(self) -> EditSession:
        if self.phase is not EditPhase.CONFIRMING_DISCARD or self.session is None:
            raise ValidationFailure("No discard is pending")
        self.session = self.session.discard()
        self._move(EditPhase.READY)
        return self.session

    def cancel_discard(self) -> None:
        if self.phase is EditPhase.CONFIRMING_DISCARD:
            self._move(EditPhase.READY)

    async def retry(self) -> EditSession:
        """Recover from Error.

        Reloads when nothing was loaded yet. After a Conflict the user is
        reloaded and the pending selection rebased onto it, leaving the
        editor Ready for review. Any other save failure is saved again.
        """
        if self.phase is not EditPhase.ERROR:
            raise ValidationFailure("Nothing to retry")
        if self.session is None:
            return await self.open()
        if isinstance(self.error, Conflict):
            pending = self.session
            data = await self._fetch()
            return self._ready(data, pending.rebase(data.catalog, data.resolved))
        return await self.save()
