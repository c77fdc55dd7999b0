"""
Map stored books and authors to the public JSON shape.
"""

from typing import Dict, Iterable, List

from storage.models import Author, Book


def represent_book(book: Book, author: Author) -> Dict:
    return {
        "id": book.id,
        "title": book.title,
        "author_name": author.full_name,
        "author_age": author.age,
    }


def represent_books(books: Iterable[Book], authors_by_id: Dict[int, Author]) -> List[Dict]:
    """Represent a sequence of books, keeping their order."""
    return [represent_book(book, authors_by_id[book.author_id]) for book in books]
