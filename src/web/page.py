"""Server-rendered memo page.

The page lists every memo and carries a small inline script that talks to
the ``/api/memos`` endpoints and reloads after each change. Memo text is
always HTML-escaped before it is placed in the markup.
"""

from __future__ import annotations

import html
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.memos.models import Memo

_STYLE = """
    <style>
        body {
            font-family: 'Hiragino Sans', 'Yu Gothic', 'Meiryo', sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            margin: 0;
            padding: 20px;
            min-height: 100vh;
        }
        .container { max-width: 900px; margin: 0 auto; }
        .header { text-align: center; margin-bottom: 2rem; }
        .header h1 { color: white; font-size: 3rem; margin: 0; text-shadow: 2px 2px 4px rgba(0,0,0,0.3); }
        .header p { color: white; font-size: 1.2rem; margin: 0.5rem 0; opacity: 0.9; }
        .card {
            background: white;
            padding: 2rem;
            border-radius: 15px;
            box-shadow: 0 8px 25px rgba(0, 0, 0, 0.15);
            margin-bottom: 20px;
        }
        .form-group { margin-bottom: 1.5rem; }
        label { display: block; margin-bottom: 0.5rem; font-weight: bold; color: #333; }
        input[type="text"], textarea {
            width: 100%;
            padding: 0.75rem;
            border: 2px solid #e2e8f0;
            border-radius: 8px;
            font-size: 1rem;
            box-sizing: border-box;
        }
        input[type="text"]:focus, textarea:focus { outline: none; border-color: #667eea; }
        textarea { resize: vertical; min-height: 100px; }
        button {
            background: #667eea;
            color: white;
            padding: 0.75rem 1.5rem;
            border: none;
            border-radius: 8px;
            cursor: pointer;
            font-size: 1rem;
            margin-right: 0.5rem;
        }
        button:hover { background: #5a67d8; }
        button.delete { background: #e53e3e; }
        button.edit { background: #38a169; }
        button.cancel { background: #718096; }
        .memo-item {
            background: linear-gradient(135deg, #f7fafc 0%, #edf2f7 100%);
            padding: 1.5rem;
            margin-bottom: 1.5rem;
            border-radius: 12px;
            border-left: 5px solid #667eea;
        }
        .memo-title { font-size: 1.4rem; font-weight: bold; margin-bottom: 0.5rem; color: #2d3748; }
        .memo-content { font-size: 1.1rem; margin-bottom: 1rem; color: #4a5568; line-height: 1.6; white-space: pre-wrap; }
        .memo-meta {
            font-size: 0.85rem;
            color: #718096;
            margin-bottom: 1rem;
            display: flex;
            justify-content: space-between;
            flex-wrap: wrap;
        }
        .edit-form { display: none; margin-top: 1.5rem; padding-top: 1.5rem; border-top: 2px solid #e2e8f0; }
        .edit-form.active { display: block; }
        .no-memos { text-align: center; color: #718096; font-style: italic; margin: 2rem 0; }
        .memo-count { text-align: center; color: #4a5568; margin-bottom: 1rem; }
        @media (max-width: 768px) {
            .container { padding: 0 10px; }
            .header h1 { font-size: 2rem; }
            .card { padding: 1.5rem; }
        }
    </style>
"""

_SCRIPT = """
    <script>
        async function send(method, url, body) {
            const options = { method: method, headers: {} };
            if (body !== undefined) {
                options.headers['Content-Type'] = 'application/json';
                options.body = JSON.stringify(body);
            }
            const response = await fetch(url, options);
            if (!response.ok) {
                const error = await response.json();
                throw new Error(error.error);
            }
            return response.json();
        }

        document.getElementById('addForm').addEventListener('submit', async (e) => {
            e.preventDefault();
            const title = document.getElementById('newTitle').value;
            const content = document.getElementById('newContent').value;
            try {
                await send('POST', '/api/memos', { title: title, content: content });
                location.reload();
            } catch (error) {
                alert('メモの保存に失敗しました: ' + error.message);
            }
        });

        async function deleteMemo(id) {
            if (!confirm('このメモを削除しますか？削除すると元に戻せません。')) {
                return;
            }
            try {
                await send('DELETE', '/api/memos/' + id);
                location.reload();
            } catch (error) {
                alert('メモの削除に失敗しました: ' + error.message);
            }
        }

        function toggleEdit(id) {
            document.getElementById('edit-' + id).classList.toggle('active');
        }

        async function updateMemo(id) {
            const title = document.getElementById('editTitle-' + id).value;
            const content = document.getElementById('editContent-' + id).value;
            if (!title.trim() || !content.trim()) {
                alert('タイトルと内容は必須です。');
                return;
            }
            try {
                await send('PUT', '/api/memos/' + id, { title: title, content: content });
                location.reload();
            } catch (error) {
                alert('メモの更新に失敗しました: ' + error.message);
            }
        }
    </script>
"""


def format_timestamp(value: str) -> str:
    """Render an ISO timestamp in local time, e.g. ``2025/01/31 18:15:00``."""
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return value
    return moment.astimezone().strftime("%Y/%m/%d %H:%M:%S")


def _render_memo(memo: Memo) -> str:
    mid = memo.id
    title = html.escape(memo.title)
    content = html.escape(memo.content)
    meta = f"<span>📅 作成: {format_timestamp(memo.created_at)}</span>"
    if memo.updated_at != memo.created_at:
        meta += f"\n                <span>🔄 更新: {format_timestamp(memo.updated_at)}</span>"
    return f"""
        <div class="memo-item" data-id="{mid}">
            <div class="memo-title">{title}</div>
            <div class="memo-content">{content}</div>
            <div class="memo-meta">
                {meta}
            </div>
            <div class="memo-actions">
                <button class="edit" onclick="toggleEdit({mid})">✏️ 編集</button>
                <button class="delete" onclick="deleteMemo({mid})">🗑️ 削除</button>
            </div>
            <div class="edit-form" id="edit-{mid}">
                <h3>メモを編集</h3>
                <div class="form-group">
                    <label>タイトル:</label>
                    <input type="text" id="editTitle-{mid}" value="{title}" maxlength="200">
                </div>
                <div class="form-group">
                    <label>内容:</label>
                    <textarea id="editContent-{mid}" maxlength="5000">{content}</textarea>
                </div>
                <button onclick="updateMemo({mid})">💾 更新</button>
                <button class="cancel" onclick="toggleEdit({mid})">❌ キャンセル</button>
            </div>
        </div>"""


def render_page(memos: Sequence[Memo]) -> str:
    """Return the complete HTML document for *memos*."""
    if memos:
        items = "".join(_render_memo(m) for m in memos)
    else:
        items = (
            '<div class="no-memos">まだメモがありません。'
            "上のフォームから最初のメモを作成しましょう！</div>"
        )

    return f"""<!DOCTYPE html>
<html lang="ja">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>日本語メモアプリ</title>
{_STYLE}
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>📝 メモアプリ</h1>
            <p>あなたの大切な思考を記録しましょう</p>
        </div>

        <div class="card">
            <div class="memo-form">
                <h2>新しいメモを作成</h2>
                <form id="addForm">
                    <div class="form-group">
                        <label for="newTitle">タイトル:</label>
                        <input type="text" id="newTitle" name="title" maxlength="200"
                               placeholder="メモのタイトルを入力..." required>
                    </div>
                    <div class="form-group">
                        <label for="newContent">内容:</label>
                        <textarea id="newContent" name="content" maxlength="5000"
                                  placeholder="メモの内容を入力してください..." required></textarea>
                    </div>
                    <button type="submit">💾 メモを保存</button>
                </form>
            </div>
        </div>

        <div class="card">
            <div class="memo-list">
                <h2>📋 メモ一覧</h2>
                <div class="memo-count">全 {len(memos)} 件のメモ</div>
                {items}
            </div>
        </div>
    </div>
{_SCRIPT}
</body>
</html>
"""
