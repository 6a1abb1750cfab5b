from shortlinks.dao.file.file_backend import FileBackend


__all__ = ['FileBackend']
