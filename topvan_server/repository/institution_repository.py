from topvan_server.exception.ValidationError import ValidationError
from topvan_server.repository.base_repository import BaseRepository


class InstitutionRepository(BaseRepository):
    collection_name = 'institutions'
    default_sort = [('name', 1)]

    def create_institution(self, name):
        """Create an institution; names are unique ignoring case and surrounding spaces."""
        name = (name or '').strip()
        if not name:
            raise ValidationError({'name': 'name is required.'})
        wanted = name.casefold()
        if any((doc.get('name') or '').strip().casefold() == wanted for doc in self.find()):
            raise ValidationError({'name': f"Institution '{name}' already exists."})
        return self.create({'name': name})
