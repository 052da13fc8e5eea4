"""Tests for file operations business logic."""

import pytest

from server.apps.accounts.exceptions import MissingFieldError
from server.apps.accounts.logic.account_operations import apply_usage_delta
from server.apps.files.exceptions import InvalidFileSizeError
from server.apps.files.logic.file_operations import (
    create_file,
    delete_file,
    get_file,
    list_children,
    remove_file,
)
from server.apps.files.models import File, Folder


@pytest.mark.django_db
def test_create_file_then_list(account, folder):
    """Test a created file appears exactly once in its folder listing."""
    file_instance = create_file(
        account,
        'report.pdf',
        2048,
        'application/pdf',
        folder_id=folder.id,
    )

    listing = list_children(account, folder.id)

    assert listing.files.count(file_instance) == 1
    assert file_instance not in list_children(account).files


@pytest.mark.django_db
def test_create_file_guesses_mime_type(account):
    """Test an empty MIME type is guessed from the name."""
    file_instance = create_file(account, 'photo.jpg', 10)

    assert file_instance.mime_type == 'image/jpeg'


@pytest.mark.django_db
def test_create_file_keeps_given_mime_type(account):
    """Test an explicit MIME type is stored as given."""
    file_instance = create_file(account, 'data.bin', 10, 'application/x-custom')

    assert file_instance.mime_type == 'application/x-custom'


@pytest.mark.django_db
def test_create_file_does_not_touch_usage(account):
    """Test create_file only records the file."""
    create_file(account, 'a.txt', 100)

    account.refresh_from_db()
    assert account.storage_used == 0


@pytest.mark.django_db
def test_create_file_ignores_quota(small_account):
    """Test the admission check is left to the caller."""
    file_instance = create_file(small_account, 'huge.iso', 10_000)

    assert file_instance.size_bytes == 10_000


@pytest.mark.django_db
def test_create_file_empty_name(account):
    """Test file names can't be empty."""
    with pytest.raises(MissingFieldError):
        create_file(account, '', 10)


@pytest.mark.django_db
def test_create_file_negative_size(account):
    """Test negative sizes are rejected before hitting the database."""
    with pytest.raises(InvalidFileSizeError, match='cannot be negative'):
        create_file(account, 'a.txt', -5)

    assert not File.objects.exists()


@pytest.mark.django_db
def test_create_file_in_foreign_folder(other_account, folder):
    """Test files can't be placed in another account's folder."""
    with pytest.raises(Folder.DoesNotExist):
        create_file(other_account, 'a.txt', 10, folder_id=folder.id)


@pytest.mark.django_db
def test_list_children_root(account, folder):
    """Test listing the root level."""
    root_file = create_file(account, 'root.txt', 1)
    create_file(account, 'inner.txt', 1, folder_id=folder.id)

    listing = list_children(account)

    assert listing.folders == [folder]
    assert listing.files == [root_file]


@pytest.mark.django_db
def test_list_children_insertion_order(account):
    """Test records come back in insertion order, not by name."""
    names = ['zeta.txt', 'alpha.txt', 'mid.txt']
    for name in names:
        create_file(account, name, 1)

    listing = list_children(account)

    assert [f.name for f in listing.files] == names


@pytest.mark.django_db
def test_list_children_isolated_per_account(account, other_account):
    """Test an account never sees another account's records."""
    create_file(other_account, 'theirs.txt', 1)
    Folder.objects.create(owner=other_account, name='Theirs')

    listing = list_children(account)

    assert listing.folders == []
    assert listing.files == []


@pytest.mark.django_db
def test_get_file(account, other_account):
    """Test get_file only finds the account's own files."""
    file_instance = create_file(account, 'a.txt', 1)

    assert get_file(account, file_instance.id) == file_instance
    with pytest.raises(File.DoesNotExist):
        get_file(other_account, file_instance.id)


@pytest.mark.django_db
def test_delete_file_success(account):
    """Test delete_file removes the record and returns it."""
    file_instance = create_file(account, 'a.txt', 100)
    file_id = file_instance.id

    removed = delete_file(file_id)

    assert removed.name == 'a.txt'
    assert removed.size_bytes == 100
    assert not File.objects.filter(pk=file_id).exists()


@pytest.mark.django_db
def test_delete_file_leaves_usage_alone(account):
    """Test delete_file doesn't touch usage."""
    file_instance = create_file(account, 'a.txt', 100)
    apply_usage_delta(account, 100)

    delete_file(file_instance.id)

    account.refresh_from_db()
    assert account.storage_used == 100


@pytest.mark.django_db
def test_delete_file_not_found(account):
    """Test deleting non-existent file."""
    with pytest.raises(File.DoesNotExist):
        delete_file(99999)


@pytest.mark.django_db
def test_remove_file_releases_usage(account):
    """Test remove_file deletes and decrements the owner's usage."""
    file_instance = create_file(account, 'a.txt', 100)
    apply_usage_delta(account, 250)

    remove_file(file_instance.id)

    account.refresh_from_db()
    assert account.storage_used == 150
    assert not File.objects.exists()


@pytest.mark.django_db
def test_remove_file_clamps_usage(account):
    """Test usage never goes negative when releasing a file."""
    file_instance = create_file(account, 'a.txt', 100)

    remove_file(file_instance.id)

    account.refresh_from_db()
    assert account.storage_used == 0


@pytest.mark.django_db
def test_remove_file_not_found(account):
    """Test removing a missing file changes nothing."""
    apply_usage_delta(account, 50)

    with pytest.raises(File.DoesNotExist):
        remove_file(99999)

    account.refresh_from_db()
    assert account.storage_used == 50
