SERVICE_HEALTHY = 'SERVICE_HEALTHY'
DATA_STORE_UNREACHABLE = 'DATA_STORE_UNREACHABLE'
