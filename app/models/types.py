"""모델에서 공통으로 사용하는 컬럼 타입을 정의합니다."""

import json

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class NonEscapedJSON(TypeDecorator):
    """한글이 유니코드로 저장되지 않도록 하는 JSON 타입

    추천 메뉴처럼 문자열 리스트를 저장할 때 사용하며, TEXT 컬럼에 `ensure_ascii=False`로 직렬화합니다.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """DB에 저장하기 전 변환 (한글이 유니코드 이스케이프 되지 않도록 설정)"""
        if value is not None:
            return json.dumps(value, ensure_ascii=False)
        return value

    def process_result_value(self, value, dialect):
        """DB에서 가져올 때 변환"""
        if value is not None:
            return json.loads(value)
        return value
