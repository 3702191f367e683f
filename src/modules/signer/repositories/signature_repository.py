from typing import List, Optional

from sqlalchemy.orm import Session, sessionmaker

from modules.signer.exceptions import NotFoundError
from modules.signer.models.signature_entity import SignatureRequestEntity
from modules.signer.models.signature_request import SignatureMethod, SignatureRequest


class SignatureRepository:
    """
    Acceso a la tabla de firmas.

    Cada operación abre su propia sesión: sin caché, siempre se lee el estado
    confirmado en la base.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def fetch_pending(self) -> List[SignatureRequest]:
        with self.session_factory() as session:
            entities = (
                session
                .query(SignatureRequestEntity)
                .filter(
                    SignatureRequestEntity.processed == False,  # noqa: E712
                    SignatureRequestEntity.method.in_([m.value for m in SignatureMethod]),
                )
                .order_by(SignatureRequestEntity.id.asc())
                .all()
            )
            return [entity.to_domain() for entity in entities]

    def find_by_id(self, record_id: int) -> Optional[SignatureRequest]:
        with self.session_factory() as session:
            entity = session.get(SignatureRequestEntity, record_id)
            return entity.to_domain() if entity else None

    def find_by_subject_and_method(self, subject_id: int, method: SignatureMethod) -> Optional[SignatureRequest]:
        """Solo devuelve registros ya firmados en el portal."""
        with self.session_factory() as session:
            entity = (
                session
                .query(SignatureRequestEntity)
                .filter(
                    SignatureRequestEntity.subject_id == subject_id,
                    SignatureRequestEntity.method == method.value,
                    SignatureRequestEntity.portal_signed == True,  # noqa: E712
                )
                .order_by(SignatureRequestEntity.id.asc())
                .first()
            )
            return entity.to_domain() if entity else None

    def update(self, record: SignatureRequest) -> None:
        with self.session_factory() as session:
            entity = self._get_or_raise(session, record.id)
            entity.apply(record)
            session.commit()

    @staticmethod
    def _get_or_raise(session: Session, record_id: int) -> SignatureRequestEntity:
        entity = session.get(SignatureRequestEntity, record_id)
        if not entity:
            raise NotFoundError(record_id)
        return entity
