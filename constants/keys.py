class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    FORM_DATA = "get_featured.form_data"
    FORM_ERRORS = "get_featured.errors"
    FIELD_STATUS = "get_featured.field_status"
    FORM_SESSION = "get_featured.session"

    @staticmethod
    def scoped(key: str, namespace: str | None) -> str:
        """Return ``key`` suffixed with ``namespace`` when one is given."""

        if not namespace:
            return key
        return f"{key}.{namespace}"


class FormDataKeys:
    """Snapshot keys the engine reads beyond the configured fields."""

    APPLICATION_TYPE = "applicationType"
