"""관리자 백오피스 인증 및 데이터 권한 서비스."""
