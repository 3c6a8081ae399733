"""
Session Lifecycle Manager.

Owns the single open workout session and enforces its state machine:

    no session -> active <-> paused -> completed | cancelled

Every mutating operation runs under one asyncio.Lock, so concurrent callers
are queued rather than rejected. Preconditions are checked before anything
is mutated, and each mutation is written to the SessionRepository before the
call returns.

The health bridge is advisory: its failures are logged and returned in
SessionOperationResult.health_error but never undo a local transition.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from application.exceptions import (
    ExerciseNotFound,
    HealthBridgeFailure,
    InvalidInput,
    InvalidStateTransition,
    NoActiveSession,
    PersistenceFailure,
    SessionAlreadyActive,
    SetNotFound,
    WorkoutNotFound,
)
from application.ports import (
    ExerciseCatalogRepository,
    HealthBridge,
    HealthBridgeError,
    RepositoryError,
    SessionRepository,
    WorkoutActivityType,
    WorkoutTemplateRepository,
)
from backend.settings import Settings, get_settings
from domain.models import (
    CatalogExercise,
    SessionExercise,
    SessionSet,
    SessionState,
    TemplateExercise,
    WorkoutSession,
    WorkoutTemplate,
)
from domain.models.exercise import DEFAULT_REPS, DEFAULT_REST_SECONDS
from domain.models.session import utcnow
from domain.services.energy import estimate_active_energy
from domain.services.warmup import (
    WarmupStrategy,
    calculate_warmup_sets,
    recommended_strategy,
)

logger = logging.getLogger(__name__)

_ACTIVE = (SessionState.ACTIVE,)
_OPEN = (SessionState.ACTIVE, SessionState.PAUSED)


@dataclass
class SessionOperationResult:
    """Result of a session lifecycle operation."""

    session: WorkoutSession
    health_error: Optional[HealthBridgeFailure] = None

    @property
    def health_synced(self) -> bool:
        return self.health_error is None


class SessionLifecycleManager:
    """
    Coordinates the open workout session with persistence and health sync.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> manager = SessionLifecycleManager(
        ...     session_repo=session_repo,
        ...     catalog_repo=catalog_repo,
        ...     workout_repo=workout_repo,
        ...     health_bridge=health_bridge,
        ... )
        >>> result = await manager.start_session(workout_id="w-1")
        >>> ex = result.session.sorted_exercises[0]
        >>> await manager.complete_set(ex.id, ex.sorted_sets[0].id)
        >>> await manager.end_session()
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        catalog_repo: ExerciseCatalogRepository,
        workout_repo: WorkoutTemplateRepository,
        health_bridge: Optional[HealthBridge] = None,
        *,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialize the manager with required dependencies.

        Args:
            session_repo: Repository persisting sessions
            catalog_repo: Exercise catalog for defaults and last-used values
            workout_repo: Workout templates sessions are started from
            health_bridge: External health store, or None to disable health sync
            settings: Settings instance (defaults to get_settings())
            clock: Returns the current time; injectable for tests
        """
        self._session_repo = session_repo
        self._catalog_repo = catalog_repo
        self._workout_repo = workout_repo
        self._health_bridge = health_bridge
        self._settings = settings or get_settings()
        self._clock = clock
        self._lock = asyncio.Lock()
        self._session: Optional[WorkoutSession] = None
        self._unsaved_error: Optional[RepositoryError] = None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def current_session(self) -> Optional[WorkoutSession]:
        """Snapshot of the owned session, or None."""
        if self._session is None:
            return None
        return self._session.model_copy(deep=True)

    @property
    def has_open_session(self) -> bool:
        return self._session is not None and self._session.is_open

    @property
    def has_unsaved_session(self) -> bool:
        """True while an ended session is waiting for retry_persist() or discard_session()."""
        return self._unsaved_error is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start_session(
        self,
        workout_id: Optional[str] = None,
        exercises: Optional[Sequence[SessionExercise]] = None,
        workout_name: Optional[str] = None,
    ) -> SessionOperationResult:
        """
        Start a new session, from a template or from explicit exercises.

        Args:
            workout_id: Template to build the session from
            exercises: Exercises to use when no template is given
            workout_name: Overrides the template name snapshot

        Raises:
            SessionAlreadyActive: If a session is active or paused
            WorkoutNotFound: If the template does not exist
            PersistenceFailure: If the session could not be saved, or an
                ended session is still waiting for retry_persist()
        """
        async with self._lock:
            if self._unsaved_error is not None:
                raise PersistenceFailure("start_session", self._unsaved_error)
            if self._session is not None and self._session.is_open:
                raise SessionAlreadyActive(self._session.id)

            template: Optional[WorkoutTemplate] = None
            if workout_id is not None:
                template = await self._load_template(workout_id)

            if template is not None:
                session_exercises = [
                    await self._exercise_from_template(te, index, template.default_rest_time)
                    for index, te in enumerate(template.sorted_exercises)
                ]
            else:
                session_exercises = [
                    e.model_copy(deep=True) for e in (exercises or [])
                ]
                for index, exercise in enumerate(session_exercises):
                    exercise.order_index = index

            session = WorkoutSession(
                workout_id=workout_id,
                workout_name=workout_name or (template.name if template else None),
                start_date=self._clock(),
                exercises=session_exercises,
            )

            # A session that was never saved is not adopted
            await self._persist("start_session", session, new=True)
            self._session = session
            logger.info(
                f"Started session {session.id} ({session.workout_name or 'ad hoc'}) "
                f"with {len(session.exercises)} exercises"
            )

            health_error = None
            if self._health_enabled:
                try:
                    handle = await self._health_bridge.start_session(
                        WorkoutActivityType.TRADITIONAL_STRENGTH_TRAINING,
                        session.start_date,
                    )
                except HealthBridgeError as e:
                    health_error = self._health_failure("start_session", e)
                else:
                    session.health_session_id = handle
                    await self._persist("start_session", session)

            return self._result(session, health_error)

    async def pause_session(self) -> SessionOperationResult:
        """Pause the active session."""
        async with self._lock:
            session = self._require_session("pause", _ACTIVE)
            session.state = SessionState.PAUSED
            await self._persist("pause_session", session)
            logger.info(f"Paused session {session.id}")

            health_error = None
            handle = self._health_handle(session)
            if handle:
                try:
                    await self._health_bridge.pause_session(handle)
                except HealthBridgeError as e:
                    health_error = self._health_failure("pause_session", e)
            return self._result(session, health_error)

    async def resume_session(self) -> SessionOperationResult:
        """Resume a paused session."""
        async with self._lock:
            session = self._require_session("resume", (SessionState.PAUSED,))
            session.state = SessionState.ACTIVE
            await self._persist("resume_session", session)
            logger.info(f"Resumed session {session.id}")

            health_error = None
            handle = self._health_handle(session)
            if handle:
                try:
                    await self._health_bridge.resume_session(handle)
                except HealthBridgeError as e:
                    health_error = self._health_failure("resume_session", e)
            return self._result(session, health_error)

    async def end_session(self) -> SessionOperationResult:
        """
        Complete the open session and release it.

        The completed record is written first. Catalog last-used values and
        the health sample are updated afterwards on a best-effort basis.

        Raises:
            PersistenceFailure: If the completed record could not be written.
                The session is then held as unsaved until retry_persist()
                or discard_session() is called.
        """
        async with self._lock:
            session = self._require_session("end", _OPEN)
            session.end_date = max(self._clock(), session.start_date)
            session.state = SessionState.COMPLETED
            await self._persist_terminal("end_session", session)
            return await self._after_end(session)

    async def cancel_session(self) -> SessionOperationResult:
        """
        Cancel the open session and release it.

        The record is kept as CANCELLED, or deleted when
        retain_cancelled_sessions is disabled. A failed write holds the
        session as unsaved, as for end_session().
        """
        async with self._lock:
            session = self._require_session("cancel", _OPEN)
            session.end_date = max(self._clock(), session.start_date)
            session.state = SessionState.CANCELLED
            await self._persist_terminal("cancel_session", session)
            return await self._after_cancel(session)

    async def retry_persist(self) -> SessionOperationResult:
        """
        Write an ended session whose final write failed, then release it.

        The steps that follow a successful end or cancel (catalog update,
        health sync) run once the write succeeds.

        Raises:
            NoActiveSession: If no unsaved session is held
            PersistenceFailure: If the write fails again
        """
        async with self._lock:
            session = self._require_unsaved("retry persist")
            await self._persist_terminal("retry_persist", session)
            if session.state == SessionState.COMPLETED:
                return await self._after_end(session)
            return await self._after_cancel(session)

    async def discard_session(self) -> SessionOperationResult:
        """
        Drop an ended session whose final write failed.

        The stored record keeps its last persisted state. Health tracking
        for the session is cancelled.

        Raises:
            NoActiveSession: If no unsaved session is held
        """
        async with self._lock:
            session = self._require_unsaved("discard session")
            self._session = None
            self._unsaved_error = None
            logger.warning(f"Discarded unsaved {session.state.value} session {session.id}")

            health_error = await self._cancel_health_session(session)
            return self._result(session, health_error)

    async def restore_active_session(self) -> Optional[WorkoutSession]:
        """
        Adopt a persisted active or paused session, e.g. after a restart.

        Returns:
            Snapshot of the adopted session, or None if there is none

        Raises:
            PersistenceFailure: If sessions cannot be loaded, or an unsaved
                ended session is still held
        """
        async with self._lock:
            if self._unsaved_error is not None:
                raise PersistenceFailure("restore_active_session", self._unsaved_error)
            if self._session is not None and self._session.is_open:
                return self._session.model_copy(deep=True)

            try:
                sessions = await self._session_repo.fetch_all()
            except RepositoryError as e:
                logger.error(f"Failed to load sessions for restore: {e}")
                raise PersistenceFailure("restore_active_session", e) from e

            open_sessions = sorted(
                (s for s in sessions if s.is_open),
                key=lambda s: s.start_date,
                reverse=True,
            )
            if not open_sessions:
                return None
            if len(open_sessions) > 1:
                logger.warning(
                    f"Found {len(open_sessions)} open sessions, restoring the most recent"
                )

            self._session = open_sessions[0]
            logger.info(f"Restored session {self._session.id} ({self._session.state.value})")
            return self._session.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Sets
    # -------------------------------------------------------------------------

    async def complete_set(
        self,
        exercise_id: str,
        set_id: str,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
    ) -> SessionOperationResult:
        """
        Mark a set as performed, optionally recording the actual weight/reps.

        Completing the last incomplete working set finishes the exercise.
        """
        async with self._lock:
            session = self._require_session("complete a set", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)
            session_set = self._require_set(exercise, set_id)
            if weight is not None and weight < 0:
                raise InvalidInput("Weight must not be negative")
            if reps is not None and reps < 0:
                raise InvalidInput("Reps must not be negative")

            if weight is not None:
                session_set.weight = weight
            if reps is not None:
                session_set.reps = reps
            session_set.mark_completed(self._clock())

            if not session_set.is_warmup and exercise.all_working_sets_completed:
                exercise.is_finished = True
                logger.debug(f"Exercise {exercise.exercise_name} finished")

            await self._persist("complete_set", session)
            return self._result(session)

    async def uncomplete_set(self, exercise_id: str, set_id: str) -> SessionOperationResult:
        async with self._lock:
            session = self._require_session("uncomplete a set", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)
            session_set = self._require_set(exercise, set_id)

            session_set.mark_incomplete()
            exercise.is_finished = False

            await self._persist("uncomplete_set", session)
            return self._result(session)

    async def add_set(
        self,
        exercise_id: str,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
        is_warmup: bool = False,
    ) -> SessionOperationResult:
        """
        Append a set to an exercise.

        Missing values are copied from the exercise's last set. Weight and
        reps must both end up greater than zero.
        """
        async with self._lock:
            session = self._require_session("add a set", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)

            last = exercise.sorted_sets[-1] if exercise.sets else None
            if weight is None:
                weight = last.weight if last else 0.0
            if reps is None:
                reps = last.reps if last else DEFAULT_REPS
            self._validate_positive(weight, reps)

            exercise.sets.append(
                SessionSet(
                    weight=weight,
                    reps=reps,
                    is_warmup=is_warmup,
                    order_index=len(exercise.sets),
                    rest_time=last.rest_time if last else DEFAULT_REST_SECONDS,
                )
            )
            exercise.renumber_sets()
            exercise.is_finished = False

            await self._persist("add_set", session)

            if not is_warmup:
                await self._update_catalog(
                    exercise.exercise_id, weight, reps, date=self._clock()
                )
            return self._result(session)

    async def add_warmup_sets(
        self,
        exercise_id: str,
        strategy: Optional[WarmupStrategy] = None,
    ) -> SessionOperationResult:
        """
        Insert warmup sets ahead of an exercise's working sets.

        The ramp is computed from the heaviest working set. Without an
        explicit strategy one is recommended from that weight.

        Raises:
            InvalidInput: If the exercise already has warmup sets or has no
                working set with a weight
        """
        async with self._lock:
            session = self._require_session("add warmup sets", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)

            if any(s.is_warmup for s in exercise.sets):
                raise InvalidInput("Exercise already has warmup sets")
            working = exercise.sorted_sets
            heaviest = max(working, key=lambda s: s.weight, default=None)
            if heaviest is None or heaviest.weight <= 0:
                raise InvalidInput("Warmup sets require a working set with a weight")

            strategy = strategy or recommended_strategy(heaviest.weight)
            warmups = calculate_warmup_sets(heaviest.weight, heaviest.reps, strategy)
            if not warmups:
                return self._result(session)

            rest_time = working[0].rest_time
            exercise.sets = [
                SessionSet(
                    weight=w.weight,
                    reps=w.reps,
                    is_warmup=True,
                    rest_time=rest_time,
                )
                for w in warmups
            ] + working
            for index, s in enumerate(exercise.sets):
                s.order_index = index

            await self._persist("add_warmup_sets", session)
            logger.debug(
                f"Added {len(warmups)} warmup sets ({strategy.name}) to {exercise.exercise_name}"
            )
            return self._result(session)

    async def remove_set(self, exercise_id: str, set_id: str) -> SessionOperationResult:
        async with self._lock:
            session = self._require_session("remove a set", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)
            session_set = self._require_set(exercise, set_id)
            if len(exercise.sets) == 1:
                raise InvalidInput("Cannot remove the only set of an exercise")

            exercise.sets.remove(session_set)
            exercise.renumber_sets()

            await self._persist("remove_set", session)
            return self._result(session)

    async def update_set(
        self,
        exercise_id: str,
        set_id: str,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
    ) -> SessionOperationResult:
        async with self._lock:
            session = self._require_session("update a set", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)
            session_set = self._require_set(exercise, set_id)
            self._validate_update(weight, reps)

            if weight is not None:
                session_set.weight = weight
            if reps is not None:
                session_set.reps = reps

            await self._persist("update_set", session)
            return self._result(session)

    async def update_all_sets(
        self,
        exercise_id: str,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
    ) -> SessionOperationResult:
        """
        Apply weight and/or reps to every incomplete set of an exercise.

        Warmup sets are included. The applied values become the exercise's
        last-used values in the catalog, with the first working set filling
        in whichever of weight or reps was not given.
        """
        async with self._lock:
            session = self._require_session("update sets", _ACTIVE)
            exercise = self._require_exercise(session, exercise_id)
            self._validate_update(weight, reps)

            for s in exercise.sets:
                if s.completed:
                    continue
                if weight is not None:
                    s.weight = weight
                if reps is not None:
                    s.reps = reps

            await self._persist("update_all_sets", session)

            working = [s for s in exercise.sorted_sets if not s.is_warmup]
            if working:
                await self._update_catalog(
                    exercise.exercise_id,
                    weight if weight is not None else working[0].weight,
                    reps if reps is not None else working[0].reps,
                    date=self._clock(),
                )
            return self._result(session)

    # -------------------------------------------------------------------------
    # Exercises
    # -------------------------------------------------------------------------

    async def update_exercise_notes(
        self,
        exercise_id: str,
        notes: Optional[str],
    ) -> SessionOperationResult:
        """Set exercise notes: trimmed, capped at the configured length, empty -> None."""
        async with self._lock:
            session = self._require_session("update notes", _OPEN)
            exercise = self._require_exercise(session, exercise_id)

            if notes is not None:
                notes = notes.strip()[: self._settings.max_exercise_notes_length].strip()
            exercise.notes = notes or None

            await self._persist("update_exercise_notes", session)
            return self._result(session)

    async def reorder_exercises(self, new_order: List[str]) -> SessionOperationResult:
        """
        Reorder exercises by session exercise id.

        Args:
            new_order: Every session exercise id exactly once, in the new order

        Raises:
            InvalidInput: If new_order is not a permutation of the exercise ids
        """
        async with self._lock:
            session = self._require_session("reorder exercises", _OPEN)
            current_ids = {e.id for e in session.exercises}
            if len(new_order) != len(current_ids) or set(new_order) != current_ids:
                raise InvalidInput("New order must contain every exercise exactly once")

            position = {exercise_id: index for index, exercise_id in enumerate(new_order)}
            for exercise in session.exercises:
                exercise.order_index = position[exercise.id]
            session.exercises.sort(key=lambda e: e.order_index)

            await self._persist("reorder_exercises", session)
            return self._result(session)

    async def add_exercise_to_session(self, exercise_id: str) -> SessionOperationResult:
        """
        Append a catalog exercise with default sets.

        Args:
            exercise_id: Catalog exercise identifier

        Raises:
            ExerciseNotFound: If the catalog has no such exercise
        """
        async with self._lock:
            session = self._require_session("add an exercise", _OPEN)
            try:
                catalog = await self._catalog_repo.fetch(exercise_id)
            except RepositoryError as e:
                logger.error(f"Failed to load catalog exercise {exercise_id}: {e}")
                raise PersistenceFailure("add_exercise_to_session", e) from e
            if catalog is None:
                raise ExerciseNotFound(exercise_id)

            exercise = SessionExercise(
                exercise_id=catalog.id,
                exercise_name=catalog.name,
                order_index=session.next_order_index,
                sets=self._default_sets(catalog),
            )
            session.exercises.append(exercise)

            await self._persist("add_exercise_to_session", session)
            logger.info(f"Added {catalog.name} to session {session.id}")
            return self._result(session)

    async def finish_exercise(self, exercise_id: str) -> SessionOperationResult:
        async with self._lock:
            session = self._require_session("finish an exercise", _OPEN)
            exercise = self._require_exercise(session, exercise_id)
            exercise.is_finished = True

            await self._persist("finish_exercise", session)
            return self._result(session)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def _health_enabled(self) -> bool:
        return self._health_bridge is not None and self._settings.health_sync_enabled

    def _require_session(
        self,
        operation: str,
        allowed: Sequence[SessionState],
    ) -> WorkoutSession:
        session = self._session
        if session is None or session.is_terminal:
            raise NoActiveSession(operation)
        if session.state not in allowed:
            raise InvalidStateTransition(operation, session.state.value)
        return session

    @staticmethod
    def _require_exercise(session: WorkoutSession, exercise_id: str) -> SessionExercise:
        exercise = session.find_exercise(exercise_id)
        if exercise is None:
            raise ExerciseNotFound(exercise_id)
        return exercise

    @staticmethod
    def _require_set(exercise: SessionExercise, set_id: str) -> SessionSet:
        session_set = exercise.find_set(set_id)
        if session_set is None:
            raise SetNotFound(set_id)
        return session_set

    @staticmethod
    def _validate_positive(weight: float, reps: int) -> None:
        if weight <= 0:
            raise InvalidInput("Weight must be greater than 0")
        if reps <= 0:
            raise InvalidInput("Reps must be greater than 0")

    @staticmethod
    def _validate_update(weight: Optional[float], reps: Optional[int]) -> None:
        if weight is None and reps is None:
            raise InvalidInput("Nothing to update: supply weight and/or reps")
        if weight is not None and weight <= 0:
            raise InvalidInput("Weight must be greater than 0")
        if reps is not None and reps <= 0:
            raise InvalidInput("Reps must be greater than 0")

    def _result(
        self,
        session: WorkoutSession,
        health_error: Optional[HealthBridgeFailure] = None,
    ) -> SessionOperationResult:
        return SessionOperationResult(
            session=session.model_copy(deep=True),
            health_error=health_error,
        )

    async def _persist(
        self,
        operation: str,
        session: WorkoutSession,
        *,
        new: bool = False,
    ) -> None:
        try:
            if new:
                await self._session_repo.save(session)
            else:
                await self._session_repo.update(session)
        except RepositoryError as e:
            logger.error(f"Failed to persist session {session.id} ({operation}): {e}")
            raise PersistenceFailure(operation, e) from e

    async def _persist_terminal(self, operation: str, session: WorkoutSession) -> None:
        """
        Write a completed or cancelled session and release it.

        On failure the session stays held as unsaved, blocking new sessions
        until retry_persist() or discard_session().
        """
        try:
            if (
                session.state == SessionState.CANCELLED
                and not self._settings.retain_cancelled_sessions
            ):
                await self._session_repo.delete(session.id)
            else:
                await self._session_repo.update(session)
        except RepositoryError as e:
            self._unsaved_error = e
            logger.error(
                f"Failed to persist {session.state.value} session {session.id} "
                f"({operation}), holding it for retry: {e}"
            )
            raise PersistenceFailure(operation, e) from e
        self._unsaved_error = None
        self._session = None

    def _require_unsaved(self, operation: str) -> WorkoutSession:
        if self._unsaved_error is None or self._session is None:
            raise NoActiveSession(operation)
        return self._session

    async def _after_end(self, session: WorkoutSession) -> SessionOperationResult:
        logger.info(
            f"Completed session {session.id}: {session.completed_sets} sets, "
            f"{session.total_volume:.1f} volume"
        )
        await self._record_last_used(session, session.end_date)

        health_error = None
        handle = self._health_handle(session)
        if handle:
            energy = estimate_active_energy(
                session.duration(),
                body_weight_kg=self._settings.default_body_weight_kg,
                met=self._settings.calorie_met_value,
            )
            metadata = {
                "total_volume": session.total_volume,
                "exercise_count": len(session.exercises),
                "workout_name": session.workout_name or "Workout",
            }
            try:
                await self._health_bridge.end_session(
                    handle,
                    session.end_date,
                    energy_kcal=energy,
                    distance_m=None,
                    metadata=metadata,
                )
            except HealthBridgeError as e:
                health_error = self._health_failure("end_session", e)
            else:
                session.active_energy_kcal = energy
                try:
                    await self._session_repo.update(session)
                except RepositoryError as e:
                    # The completed record is already stored
                    logger.warning(f"Failed to store energy for session {session.id}: {e}")
        return self._result(session, health_error)

    async def _after_cancel(self, session: WorkoutSession) -> SessionOperationResult:
        logger.info(f"Cancelled session {session.id}")
        health_error = await self._cancel_health_session(session)
        return self._result(session, health_error)

    async def _cancel_health_session(
        self,
        session: WorkoutSession,
    ) -> Optional[HealthBridgeFailure]:
        handle = self._health_handle(session)
        if not handle:
            return None
        try:
            await self._health_bridge.cancel_session(handle)
        except HealthBridgeError as e:
            return self._health_failure("cancel_session", e)
        return None

    def _health_handle(self, session: WorkoutSession) -> Optional[str]:
        if not self._health_enabled:
            return None
        return session.health_session_id

    @staticmethod
    def _health_failure(operation: str, error: HealthBridgeError) -> HealthBridgeFailure:
        logger.warning(f"Health sync failed during {operation}: {error}")
        return HealthBridgeFailure(operation, error)

    async def _load_template(self, workout_id: str) -> WorkoutTemplate:
        try:
            template = await self._workout_repo.fetch(workout_id)
        except RepositoryError as e:
            logger.error(f"Failed to load workout {workout_id}: {e}")
            raise PersistenceFailure("start_session", e) from e
        if template is None:
            raise WorkoutNotFound(workout_id)
        return template

    async def _fetch_catalog_best_effort(self, exercise_id: str) -> Optional[CatalogExercise]:
        try:
            return await self._catalog_repo.fetch(exercise_id)
        except RepositoryError as e:
            logger.warning(f"Catalog lookup failed for {exercise_id}, using template values: {e}")
            return None

    async def _exercise_from_template(
        self,
        template_exercise: TemplateExercise,
        order_index: int,
        default_rest_time: float,
    ) -> SessionExercise:
        catalog = await self._fetch_catalog_best_effort(template_exercise.exercise_id)

        if catalog is not None and catalog.last_used_weight is not None:
            weight = catalog.last_used_weight
        else:
            weight = template_exercise.target_weight or 0.0
        if catalog is not None and catalog.last_used_reps is not None:
            reps = catalog.last_used_reps
        else:
            reps = template_exercise.target_reps or DEFAULT_REPS

        fallback_rest = (
            template_exercise.rest_time
            if template_exercise.rest_time is not None
            else default_rest_time
        )
        sets = []
        for index in range(template_exercise.target_sets):
            rest_time = template_exercise.rest_time_for_set(index)
            sets.append(
                SessionSet(
                    weight=weight,
                    reps=reps,
                    order_index=index,
                    rest_time=rest_time if rest_time is not None else fallback_rest,
                )
            )

        name = template_exercise.exercise_name or (catalog.name if catalog else None)
        return SessionExercise(
            exercise_id=template_exercise.exercise_id,
            exercise_name=name or "Exercise",
            sets=sets,
            notes=template_exercise.notes,
            order_index=order_index,
            rest_time_to_next=fallback_rest,
        )

    @staticmethod
    def _default_sets(catalog: CatalogExercise) -> List[SessionSet]:
        return [
            SessionSet(
                weight=catalog.default_weight,
                reps=catalog.default_reps,
                order_index=index,
                rest_time=catalog.default_rest_time,
            )
            for index in range(catalog.default_set_count)
        ]

    async def _update_catalog(
        self,
        exercise_id: str,
        weight: float,
        reps: int,
        set_count: Optional[int] = None,
        date: Optional[datetime] = None,
    ) -> None:
        try:
            await self._catalog_repo.update_last_used(
                exercise_id, weight, reps, set_count=set_count, date=date
            )
        except RepositoryError as e:
            logger.warning(f"Failed to update last-used values for {exercise_id}: {e}")

    async def _record_last_used(self, session: WorkoutSession, now: datetime) -> None:
        """Write the last completed working set of each exercise to the catalog."""
        for exercise in session.sorted_exercises:
            done = [s for s in exercise.sorted_sets if s.completed and not s.is_warmup]
            if not done:
                continue
            last = done[-1]
            await self._update_catalog(
                exercise.exercise_id,
                last.weight,
                last.reps,
                set_count=len(done),
                date=now,
            )
