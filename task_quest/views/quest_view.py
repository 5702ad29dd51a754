"""
クエスト画面（タスク一覧 + ペット）
"""
import logging
import flet as ft
from ..exceptions import TaskValidationError
from ..game import GameController
from ..logic.achievement_logic import AchievementSystem
from ..sinks import GameSinks

logger = logging.getLogger(__name__)

PRIORITY_BADGES = {"high": "🔥", "medium": "⚡", "low": "📌"}

STAT_COLORS = {
    "critical": "#dc3545",
    "warning": "#ff9800",
}
STAT_DEFAULT_COLORS = {
    "happiness": "#ff6b6b",
    "energy": "#51cf66",
    "hunger": "#ffd43b",
}


class FletSinks(GameSinks):
    """GameControllerの出力をQuestViewへ流す"""

    def __init__(self, view: "QuestView"):
        self.view = view

    def render(self, state, tasks):
        self.view.refresh()

    def notify(self, title, body, icon):
        self.view.show_celebration(title, body, icon)

    def play_sound(self, kind):
        # 効果音ファイルは同梱していないのでログのみ
        logger.debug("Sound: %s", kind)

    def spawn_particles(self, kind, count):
        self.view.show_particles(kind, count)


class QuestView(ft.Column):
    """メイン画面"""

    def __init__(self, page: ft.Page):
        super().__init__()
        self._page = page
        self.game: GameController = None
        self.spacing = 15
        self.expand = True
        self.scroll = ft.ScrollMode.AUTO

        # === 部品定義 ===
        self.pet_emoji = ft.Text("🥚", size=70)
        self.pet_name = ft.Text("", size=18, weight=ft.FontWeight.BOLD)
        self.pet_mood = ft.Text("", size=14, italic=True)
        self.stage_banner = ft.Text("", size=12, color="#ffffff")
        self.particles_text = ft.Text("", size=20)
        self.stat_bars = {
            name: ft.ProgressBar(value=0, bgcolor="#424242", width=250)
            for name in ("happiness", "energy", "hunger")
        }

        self.level_text = ft.Text("", size=20, weight=ft.FontWeight.BOLD)
        self.title_text = ft.Text("", size=14, color="#9e9e9e")
        self.xp_bar = ft.ProgressBar(value=0, color="#7c4dff", bgcolor="#424242")
        self.xp_text = ft.Text("", size=12, color="#9e9e9e")
        self.stats_text = ft.Text("", size=12, color="#9e9e9e")
        self.sound_button = ft.IconButton(icon=ft.Icons.VOLUME_UP, on_click=self._toggle_sound)

        self.task_input = ft.TextField(label="New quest", expand=True, on_submit=self._add_task)
        self.priority_select = ft.Dropdown(
            width=120,
            value="medium",
            options=[ft.dropdown.Option(p) for p in ("low", "medium", "high")],
        )
        self.task_list = ft.Column(spacing=5)
        self.achievement_grid = ft.Row(wrap=True, spacing=10)

        self.dialog = ft.AlertDialog(
            title=ft.Text(""),
            content=ft.Text(""),
            actions=[ft.TextButton("OK", on_click=self._close_dialog)],
        )

        self._build()

    def attach(self, game: GameController):
        self.game = game

    def _build(self):
        """画面を構築"""
        pet_card = ft.Container(
            content=ft.Column([
                self.stage_banner,
                ft.GestureDetector(content=self.pet_emoji, on_tap=self._pet_clicked),
                self.pet_name,
                self.pet_mood,
                self.particles_text,
                ft.Text("Happiness", size=12),
                self.stat_bars["happiness"],
                ft.Text("Energy", size=12),
                self.stat_bars["energy"],
                ft.Text("Hunger", size=12),
                self.stat_bars["hunger"],
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER),
            bgcolor="#1e3a5f80",
            border=ft.border.all(1, "#ffffff20"),
            border_radius=15,
            padding=20,
        )

        player_card = ft.Container(
            content=ft.Column([
                ft.Row([self.level_text, self.sound_button],
                       alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                self.title_text,
                self.xp_bar,
                self.xp_text,
                self.stats_text,
            ]),
            bgcolor="#1e3a5f80",
            border=ft.border.all(1, "#ffffff20"),
            border_radius=15,
            padding=20,
        )

        add_btn = ft.IconButton(icon=ft.Icons.ADD_CIRCLE, icon_size=40, on_click=self._add_task)

        self.controls = [
            ft.Text("Task Quest 🐣", size=32, weight=ft.FontWeight.BOLD, color="#90caf9"),
            player_card,
            pet_card,
            ft.Row([self.task_input, self.priority_select, add_btn]),
            self.task_list,
            ft.Divider(),
            ft.Text("Achievements", size=18, weight=ft.FontWeight.BOLD),
            self.achievement_grid,
        ]

    # ===== シンクからの呼び出し =====

    def refresh(self):
        """状態を画面に反映"""
        if not self.game:
            return
        state = self.game.state
        pet_system = self.game.pet_system
        evolution = pet_system.get_evolution(state)

        if state.pet_hibernating:
            self.pet_emoji.value = "😴"
            self.pet_emoji.opacity = 0.7
            self.pet_name.value = f"{evolution.name} (Sleeping)"
            self.pet_mood.color = "#dc3545"
            self.stage_banner.value = "😴 HIBERNATING"
        else:
            self.pet_emoji.value = evolution.emoji
            self.pet_emoji.opacity = 1
            self.pet_name.value = evolution.name
            self.pet_mood.color = "#9e9e9e"
            self.stage_banner.value = f"Stage {evolution.stage + 1}"
        self.pet_mood.value = self.game.get_mood_text()

        for name, value in (("happiness", state.pet_happiness),
                            ("energy", state.pet_energy),
                            ("hunger", state.pet_hunger)):
            bar = self.stat_bars[name]
            bar.value = value / 100
            level = pet_system.stat_level(name, value)
            bar.color = STAT_COLORS.get(level, STAT_DEFAULT_COLORS[name])

        xp_needed = self.game.get_xp_required()
        self.level_text.value = f"Level {state.level}"
        self.title_text.value = self.game.get_level_title()
        self.xp_bar.value = min(1, state.xp / xp_needed)
        self.xp_text.value = f"{state.xp:.0f} / {xp_needed} XP"
        self.stats_text.value = (
            f"🔥 {state.streak} day streak / ✅ {state.total_completed} done / "
            f"⭐ {state.total_xp:.0f} total XP"
        )
        self.sound_button.icon = ft.Icons.VOLUME_UP if state.sound_enabled else ft.Icons.VOLUME_OFF

        self._render_tasks()
        self._render_achievements()
        self._safe_update()

    def _render_tasks(self):
        self.task_list.controls.clear()
        active = [t for t in self.game.tasks if not t.completed]
        if not active:
            self.task_list.controls.append(
                ft.Text("No quests yet. Add one above!", color="#9e9e9e"))
            return
        for task in active:
            self.task_list.controls.append(ft.ListTile(
                leading=ft.Checkbox(value=False, data=task.id, on_change=self._task_checked),
                title=ft.Text(task.text),
                subtitle=ft.Text(f"+{task.xp} XP {PRIORITY_BADGES.get(task.priority, '')}"),
                trailing=ft.IconButton(
                    icon=ft.Icons.DELETE, icon_color="red",
                    data=task.id, on_click=self._delete_clicked,
                ),
            ))

    def _render_achievements(self):
        self.achievement_grid.controls.clear()
        state = self.game.state
        for achievement in AchievementSystem.ACHIEVEMENTS:
            unlocked = achievement.id in state.achievements
            current, target = self.game.achievement_system.get_progress(achievement, state)
            self.achievement_grid.controls.append(ft.Container(
                content=ft.Column([
                    ft.Text(achievement.icon, size=24),
                    ft.Text(achievement.name, size=12, weight=ft.FontWeight.BOLD),
                    ft.Text(f"{current}/{target}", size=10, color="#9e9e9e"),
                ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=2),
                tooltip=achievement.description,
                opacity=1 if unlocked else 0.35,
                bgcolor="#1e3a5f",
                border_radius=10,
                padding=10,
                width=100,
            ))

    def show_celebration(self, title: str, body: str, icon: str):
        self.dialog.title = ft.Text(f"{icon} {title}")
        self.dialog.content = ft.Text(body)
        self._page.open(self.dialog)

    def show_particles(self, kind: str, count: int):
        symbol = "💕" if kind == "hearts" else "🎊"
        self.particles_text.value = symbol * min(count, 10)

    def _safe_update(self):
        if self._page:
            self._page.update()

    # ===== イベント =====

    def _add_task(self, e):
        try:
            self.game.add_task(self.task_input.value, self.priority_select.value)
        except TaskValidationError as err:
            self.task_input.error_text = str(err)
            self._safe_update()
            return
        self.task_input.value = ""
        self.task_input.error_text = None
        self.task_input.focus()
        self._safe_update()

    def _task_checked(self, e):
        if not self.game.complete_task(e.control.data):
            e.control.value = False
            self._safe_update()

    def _delete_clicked(self, e):
        self.game.delete_task(e.control.data)

    def _pet_clicked(self, e):
        self.game.pet()

    def _toggle_sound(self, e):
        self.game.toggle_sound()

    def _close_dialog(self, e):
        self._page.close(self.dialog)
