from walletpass.services.base_service import BaseService, ServiceError

__all__ = ['BaseService', 'ServiceError']
