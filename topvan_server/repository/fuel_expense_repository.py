from topvan_server.repository.base_repository import BaseRepository


class FuelExpenseRepository(BaseRepository):
    collection_name = 'fuelExpenses'
    default_sort = [('data', -1)]
