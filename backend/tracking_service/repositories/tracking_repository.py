"""
송장번호 저장소 — tracking_number 테이블 접근 계층
- exists / insert / find_by_code 세 가지만 제공한다 (PK = 16자리 코드).
- 세션은 요청 단위로 주입받는다 (get_db).
- 중복 방지의 실제 안전장치는 PK 제약이다. INSERT 시 위반되면 DuplicateError.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from tracking_service.exceptions import DuplicateError
from tracking_service.models import TrackingNumber

logger = logging.getLogger(__name__)


class TrackingRepository:
    """tracking_number 테이블 저장소"""

    def __init__(self, db: Session):
        self.db = db

    def exists(self, tracking_number: str) -> bool:
        row = (
            self.db.query(TrackingNumber.tracking_number)
            .filter(TrackingNumber.tracking_number == tracking_number)
            .first()
        )
        return row is not None

    def insert(self, record: TrackingNumber) -> TrackingNumber:
        """레코드 INSERT 후 커밋. PK 충돌 시 롤백하고 DuplicateError."""
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except (IntegrityError, FlushError) as e:
            # 같은 세션에 동일 PK 인스턴스가 있으면 FlushError로 올라온다
            self.db.rollback()
            logger.warning(f"송장번호 INSERT 중복: {record.tracking_number}")
            raise DuplicateError(record.tracking_number) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"송장번호 DB 저장 실패: {e}")
            raise
        return record

    def find_by_code(self, tracking_number: str) -> TrackingNumber | None:
        return (
            self.db.query(TrackingNumber)
            .filter(TrackingNumber.tracking_number == tracking_number)
            .first()
        )
