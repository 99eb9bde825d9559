from models import Comment


def test_owner_soft_deletes(api, fetch, make_comment):
    comment_id = make_comment(user_id=1)

    rv = api('delete-comment', comment_id=comment_id, user_id=1)
    assert rv.status_code == 200
    assert rv.get_json() == {'success': True, 'message': 'Comment deleted successfully'}

    comment = fetch(Comment, comment_id)
    assert comment is not None
    assert comment.is_deleted is True


def test_non_owner_cannot_delete(api, fetch, make_comment):
    comment_id = make_comment(user_id=1)

    rv = api('delete-comment', comment_id=comment_id, user_id=2)
    assert rv.status_code == 403
    assert rv.get_json() == {'success': False, 'message': 'You can only delete your own comments'}
    assert fetch(Comment, comment_id).is_deleted is False


def test_delete_twice_reports_not_found(api, make_comment):
    comment_id = make_comment(user_id=1)
    api('delete-comment', comment_id=comment_id, user_id=1)

    rv = api('delete-comment', comment_id=comment_id, user_id=1)
    assert rv.status_code == 404
    assert rv.get_json()['message'] == 'Comment not found'


def test_delete_leaves_replies_and_likes(api, fetch, like_rows, make_comment):
    parent = make_comment(user_id=1)
    reply = make_comment(user_id=2, parent_comment_id=parent)
    api('like-comment', comment_id=parent, user_id=3)

    api('delete-comment', comment_id=parent, user_id=1)
    assert fetch(Comment, reply).is_deleted is False
    assert like_rows(parent) == 1


def test_ids_required(api):
    rv = api('delete-comment', comment_id=1)
    assert rv.status_code == 400
    assert rv.get_json()['message'] == 'comment_id and user_id are required'
