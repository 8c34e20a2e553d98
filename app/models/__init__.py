# Carrega módulos para registrar tabelas no metadata:
import app.models.user_role     # noqa: F401
import app.models.role          # noqa: F401
import app.models.user          # noqa: F401
import app.models.profile       # noqa: F401
import app.models.certificate   # noqa: F401
import app.models.project       # noqa: F401
import app.models.analytics     # noqa: F401
import app.models.audit         # noqa: F401

__all__: list[str] = []
