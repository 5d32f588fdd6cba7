"""
프로젝트 이름 유사도 매칭

"찾을 수 없음" 에러 메시지에 "Did you mean X?" 문구를 붙이기 위한 휴리스틱.
검색 랭킹 용도가 아니며, 입력 문자열만 다루는 순수 함수로 구성한다.
(ORM 엔티티 → 이름 목록 변환은 호출 측 책임)
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from rapidfuzz.distance import Levenshtein

# " (Beta)" 같은 접미사(7자)를 허용하는 거리
MAX_SUGGEST_DISTANCE = 7


@dataclass(frozen=True)
class NameCandidate:
    """기존 이름 하나와 질의 이름 사이의 편집 거리 (호출마다 새로 생성)"""
    name: str
    distance: int


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein 편집 거리

    대소문자 구분, 공백 정리 없이 원문 그대로 비교한다.
    """
    return Levenshtein.distance(a, b)


def suggest_similar_name(existing_names: Sequence[str], query_name: str) -> Optional[str]:
    """
    기존 이름 목록에서 query_name의 오타/변형으로 보이는 이름을 찾는다.

    Args:
        existing_names: 비교 대상 이름 목록 (호출 측 조회 순서 그대로)
        query_name: 찾으려는 이름

    Returns:
        "A" 또는 "A or B" 형태의 제안 문자열, 적절한 후보가 없으면 None

    NOTE: 제안 문자열은 거리순이 아니라 입력 순서의 앞 두 후보로 만든다.
    정렬은 임계값 판단에 쓰는 최소 거리를 얻기 위해서만 사용한다.
    """
    if not existing_names:
        return None

    candidates = [NameCandidate(name=name, distance=edit_distance(name, query_name)) for name in existing_names]

    suggestion = candidates[0].name
    if len(candidates) > 1:
        suggestion += " or " + candidates[1].name

    # sorted()는 안정 정렬 (동일 거리는 입력 순서 유지)
    closest = sorted(candidates, key=lambda c: c.distance)[0]

    if closest.distance <= MAX_SUGGEST_DISTANCE:
        return suggestion

    # 전체 길이의 1/3보다 멀면 다른 이름으로 본다 (실수 나눗셈)
    if len(query_name) / 3 < closest.distance:
        return None

    return suggestion
