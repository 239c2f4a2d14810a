from clickshortener.dao.base.url_record_base_dao import UrlRecordBaseDAO, target_index


__all__ = ['UrlRecordBaseDAO', 'target_index']
