from . import Render


def index(store):
    """Site summary: record counts fetched together."""
    data = store.gather(
        book_count=lambda: store.books.count(),
        book_instance_count=lambda: store.instances.count(),
        book_instance_available_count=lambda: store.instances.count({"status": "Available"}),
        author_count=lambda: store.authors.count(),
        genre_count=lambda: store.genres.count(),
    )
    return Render('index.html', title='Local Library Home', data=data)
