from topvan_server.exception.StoreError import StoreError


class NotFoundError(StoreError):
    """Raised when an update/delete/get references an id that does not exist."""
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document '{doc_id}' not found in '{collection}'")
