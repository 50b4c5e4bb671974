from jsembed.utils.imports import load_data_from_ref, load_object_from_ref

__all__ = ['load_data_from_ref', 'load_object_from_ref']
