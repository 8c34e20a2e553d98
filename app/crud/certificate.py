from typing import Any, Sequence

from app.crud.base import OwnedRecordStore
from app.models.certificate import Certificate
from app.schemas.certificate import CertificateCreate, CertificateUpdate


class CRUDCertificate(OwnedRecordStore[Certificate, CertificateCreate, CertificateUpdate]):
    label = "Certificate"
    create_schema = CertificateCreate
    update_schema = CertificateUpdate

    def ordering(self) -> Sequence[Any]:
        # mais recente pela data de emissão; sem data vai para o fim
        return (
            Certificate.issue_date.desc().nulls_last(),
            Certificate.created_at.desc(),
        )


certificate_crud = CRUDCertificate(Certificate)
