import datetime
import os

import streamlit as st

from config import load_settings
from errors import TransportError
from tracker import TABS, WorkoutTracker, format_performed_sets

TAB_LABELS = {
    "plan": "Workout Planner",
    "log": "Log Session",
    "history": "History",
    "library": "Exercise Library",
}

EXERCISE_KEYS = ("ex_name", "ex_group", "ex_equip", "ex_notes")


class TrackerApp:
    """Streamlit application for planning and logging workouts."""

    def __init__(self, yaml_path: str | None = None) -> None:
        st.set_page_config(page_title="Workout Tracker", layout="wide")
        if "tracker" not in st.session_state:
            tracker = WorkoutTracker(settings=load_settings(yaml_path))
            tracker.refresh()
            st.session_state.tracker = tracker
        self.tracker: WorkoutTracker = st.session_state.tracker

    # widget callbacks

    def _flash(self, result) -> None:
        if isinstance(result.error, TransportError):
            st.session_state.flash = str(result.error)

    def _refresh(self) -> None:
        faults = self.tracker.refresh()
        if faults:
            st.session_state.flash = "Could not load: " + ", ".join(sorted(faults))

    def _add_exercise(self) -> None:
        form = self.tracker.exercise_form
        form.name = st.session_state.ex_name
        form.muscle_group = st.session_state.ex_group
        form.equipment = st.session_state.ex_equip
        form.notes = st.session_state.ex_notes
        result = self.tracker.add_exercise()
        if result.ok:
            for key in EXERCISE_KEYS:
                st.session_state[key] = ""
        self._flash(result)

    def _add_item(self) -> None:
        composer = self.tracker.composer
        composer.exercise_name = st.session_state.item_name
        composer.sets = st.session_state.item_sets
        composer.reps = st.session_state.item_reps
        composer.rest_seconds = st.session_state.item_rest
        if self.tracker.add_workout_item():
            st.session_state.item_name = ""

    def _create_workout(self) -> None:
        composer = self.tracker.composer
        composer.title = st.session_state.w_title
        composer.description = st.session_state.w_desc
        result = self.tracker.create_workout()
        if result.ok:
            st.session_state.w_title = ""
            st.session_state.w_desc = ""
        self._flash(result)

    def _clear_set_inputs(self) -> None:
        for key in [k for k in st.session_state.keys() if str(k).startswith("set_")]:
            del st.session_state[key]

    def _use_template(self, template) -> None:
        self.tracker.load_template(template)
        self._clear_set_inputs()
        st.session_state.s_title = self.tracker.session.workout_title
        st.session_state.view = self.tracker.tab

    def _update_set(self, i: int, j: int, field: str) -> None:
        value = st.session_state[f"set_{i}_{j}_{field}"]
        self.tracker.update_performed_set(i, j, field, value)

    def _log_session(self) -> None:
        session = self.tracker.session
        session.date_str = st.session_state.s_date.isoformat()
        session.workout_title = st.session_state.s_title
        session.notes = st.session_state.s_notes
        result = self.tracker.log_session()
        if result.ok:
            st.session_state.s_notes = ""
            self._clear_set_inputs()
            st.session_state.view = self.tracker.tab
        self._flash(result)

    def _filter_history(self) -> None:
        date_str = st.session_state.h_date.isoformat()
        self._flash(self.tracker.filter_history(date_str))

    # views

    def _library_tab(self) -> None:
        st.header("Exercise Library")
        left, right = st.columns(2)
        with left:
            st.text_input("Name", key="ex_name", placeholder="Bench Press")
            st.text_input("Muscle Group", key="ex_group", placeholder="Chest")
            st.text_input("Equipment", key="ex_equip", placeholder="Barbell")
            st.text_area("Notes", key="ex_notes", height=80)
            st.button("Add Exercise", on_click=self._add_exercise)
        with right:
            if not self.tracker.stores.exercises:
                st.caption("No exercises yet")
            for ex in self.tracker.stores.exercises:
                details = " • ".join(v for v in (ex.muscle_group, ex.equipment) if v)
                st.markdown(f"**{ex.name}**  \n{details}")

    def _plan_tab(self) -> None:
        st.header("Workout Planner")
        composer = self.tracker.composer
        left, right = st.columns(2)
        with left:
            st.text_input("Title", key="w_title", placeholder="Push Day")
            st.text_area("Description", key="w_desc", height=68)
            names = [ex.name for ex in self.tracker.stores.exercises]
            st.text_input(
                "Exercise",
                key="item_name",
                placeholder=", ".join(names[:3]) or "Exercise name",
            )
            c1, c2, c3 = st.columns(3)
            c1.number_input("Sets", min_value=1, value=composer.sets, key="item_sets")
            c2.number_input("Reps", min_value=1, value=composer.reps, key="item_reps")
            c3.number_input(
                "Rest (s)", min_value=0, value=composer.rest_seconds, key="item_rest"
            )
            st.button("Add to List", on_click=self._add_item)
            for idx, it in enumerate(composer.items):
                row, action = st.columns([4, 1])
                row.write(
                    f"{it.exercise_name} — {it.sets}x{it.reps} • rest {it.rest_seconds}s"
                )
                action.button(
                    "Remove",
                    key=f"remove_item_{idx}",
                    on_click=self.tracker.remove_workout_item,
                    args=(idx,),
                )
            st.button("Save Workout", on_click=self._create_workout)
        with right:
            st.button("Refresh", key="plan_refresh", on_click=self._refresh)
            for wo in self.tracker.stores.workouts:
                with st.expander(wo.title):
                    if wo.description:
                        st.caption(wo.description)
                    for it in wo.items:
                        st.write(f"{it.exercise_name} — {it.sets}x{it.reps}")
                    st.button(
                        "Use",
                        key=f"use_{wo.id}",
                        on_click=self._use_template,
                        args=(wo,),
                    )

    def _log_tab(self) -> None:
        st.header("Log Workout Session")
        session = self.tracker.session
        left, right = st.columns([1, 2])
        with left:
            st.date_input(
                "Date",
                value=datetime.date.fromisoformat(session.date_str),
                key="s_date",
            )
            st.text_input("Workout Title", key="s_title", placeholder="Push Day")
            st.text_area("Notes", key="s_notes", height=80)
            st.button("Save Session", on_click=self._log_session)
        with right:
            if not session.items:
                st.caption("Pick a workout in the planner to start logging")
            for i, item in enumerate(session.items):
                st.subheader(item.exercise_name)
                st.caption(f"Target {item.target_sets}x{item.target_reps}")
                for j, s in enumerate(item.performed_sets):
                    c0, c1, c2, c3 = st.columns([1, 2, 2, 2])
                    c0.write(f"#{s.set_number}")
                    c1.number_input(
                        "Weight",
                        min_value=0.0,
                        value=float(s.weight),
                        key=f"set_{i}_{j}_weight",
                        on_change=self._update_set,
                        args=(i, j, "weight"),
                    )
                    c2.number_input(
                        "Reps",
                        min_value=1,
                        value=int(s.reps),
                        key=f"set_{i}_{j}_reps",
                        on_change=self._update_set,
                        args=(i, j, "reps"),
                    )
                    c3.number_input(
                        "RPE",
                        min_value=1.0,
                        max_value=10.0,
                        value=s.rpe,
                        key=f"set_{i}_{j}_rpe",
                        on_change=self._update_set,
                        args=(i, j, "rpe"),
                    )
                st.button(
                    "Add Set",
                    key=f"add_set_{i}",
                    on_click=self.tracker.add_performed_set,
                    args=(i,),
                )

    def _history_tab(self) -> None:
        st.header("Workout History")
        c1, c2, c3 = st.columns([2, 1, 1])
        c1.date_input("Date", value=datetime.date.today(), key="h_date")
        c2.button("Filter", on_click=self._filter_history)
        c3.button("Refresh", key="history_refresh", on_click=self._refresh)
        if not self.tracker.stores.sessions:
            st.caption("No sessions logged")
        for s in self.tracker.stores.sessions:
            with st.container(border=True):
                st.markdown(f"**{s.workout_title}** · {s.date_str}")
                if s.notes:
                    st.caption(s.notes)
                for it in s.items:
                    st.write(f"{it.exercise_name}: {format_performed_sets(it)}")

    def run(self) -> None:
        st.title("Workout Tracker")
        flash = st.session_state.pop("flash", None)
        if flash:
            st.error(flash)
        if "view" not in st.session_state:
            st.session_state.view = self.tracker.tab
        choice = st.radio(
            "View", TABS, format_func=TAB_LABELS.get, horizontal=True, key="view"
        )
        self.tracker.set_tab(choice)
        getattr(self, f"_{choice}_tab")()


if __name__ == "__main__":
    yaml_path = os.environ.get("YAML_PATH", "settings.yaml")
    TrackerApp(yaml_path=yaml_path).run()
