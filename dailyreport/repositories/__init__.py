"""레포지토리 패키지, 데이터베이스 쿼리 계층.

Repository package. Each repository extends BaseRepository for generic
CRUD and adds the domain queries its service needs.
"""
