"""Geo Navigation 도메인 레이어.

외부 의존성이 없는 값 객체, 엔티티, 이벤트, 측지 계산을 정의한다.
"""
