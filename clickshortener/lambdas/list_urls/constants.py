LIST_SUCCESS = 'LIST_SUCCESS'
