"""서비스 패키지, 비즈니스 로직 계층.

Service package. Services apply business rules and call repositories;
routers commit once after the service call returns.
"""
