"""위치 기반 내비게이션 및 근접 판정 엔진."""
