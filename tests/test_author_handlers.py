from datetime import date

import pytest

from catalog.errors import NotFound
from catalog.forms import FieldError
from catalog.handlers import Redirect
from catalog.handlers import authors as handlers
from catalog.records import Author


def test_list_sorted_by_family_name(store, library):
    store.authors.insert(Author("Jane", "Austen"))
    outcome = handlers.author_list(store)
    assert [a.family_name for a in outcome.context["author_list"]] == ["Asimov", "Austen", "Bova"]


def test_detail_lists_the_authors_books(store, library):
    outcome = handlers.author_detail(store, library.asimov.id)

    assert outcome.context["title"] == "Asimov, Isaac"
    assert [b.title for b in outcome.context["author_books"]] == ["Foundation"]


def test_detail_missing_author(store):
    with pytest.raises(NotFound):
        handlers.author_detail(store, "nope")


def test_create_author(store):
    outcome = handlers.author_create_post(store, {
        "first_name": " Ursula ", "family_name": "Le Guin",
        "date_of_birth": "1929-10-21", "date_of_death": "2018-01-22",
    })

    author = store.authors.find_one({"family_name": "Le Guin"})
    assert outcome == Redirect(f"/author/{author.id}")
    assert author.first_name == "Ursula"
    assert author.date_of_birth == date(1929, 10, 21)
    assert author.date_of_death == date(2018, 1, 22)


def test_create_invalid_author(store):
    outcome = handlers.author_create_post(store, {"first_name": "Ursula", "family_name": "",
                                                  "date_of_birth": "banana"})

    assert outcome.template == "author_form.html"
    assert outcome.context["errors"] == [
        FieldError("family_name", "Family name must be specified."),
        FieldError("date_of_birth", "Invalid date of birth"),
    ]
    assert outcome.context["author"].first_name == "Ursula"
    assert store.authors.count() == 0


def test_update_author_keeps_id(store, library):
    outcome = handlers.author_update_post(store, library.bova.id, {
        "first_name": "Benjamin", "family_name": "Bova", "date_of_birth": "1932-11-08",
    })

    assert outcome == Redirect(f"/author/{library.bova.id}")
    assert store.authors.get(library.bova.id).first_name == "Benjamin"
    assert store.authors.count() == 2


def test_update_get_missing_author(store):
    with pytest.raises(NotFound):
        handlers.author_update_get(store, "nope")


def test_delete_author_blocked_by_books(store, library):
    outcome = handlers.author_delete_post(store, library.asimov.id)

    assert outcome.template == "author_delete.html"
    assert [b.title for b in outcome.context["author_books"]] == ["Foundation"]
    assert store.authors.get(library.asimov.id) is not None


def test_delete_author_without_books(store, library):
    lonely = store.authors.insert(Author("Jane", "Austen"))

    assert handlers.author_delete_get(store, lonely.id).context["author_books"] == []
    assert handlers.author_delete_post(store, lonely.id) == Redirect("/authors")
    assert store.authors.get(lonely.id) is None


def test_delete_missing_author_redirects(store):
    assert handlers.author_delete_get(store, "gone") == Redirect("/authors")
