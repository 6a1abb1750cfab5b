from shortlinks.dao.base.key_value_base_backend import KeyValueBaseBackend


__all__ = ['KeyValueBaseBackend']
