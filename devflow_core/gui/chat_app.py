import tkinter as tk
from tkinter import scrolledtext
import threading
from typing import Optional

from devflow_core.api.service import ChatSession, get_default_session
from devflow_core.config.settings import settings
from devflow_core.domain.exceptions import BusinessError
from devflow_core.domain.segments import CodeSegment
from devflow_core.rendering import Identity, RenderedTurn, header_text, last_code_block, render_turn, segment_runs


class App:
    def __init__(self, root, session: ChatSession, identity: Optional[Identity] = None):
        self.root = root
        self.root.title(settings.app_title)
        self.session = session
        self.identity = identity
        self.sending = False
        self.last_code: Optional[CodeSegment] = None
        self.header = tk.Label(root, text=header_text(identity), anchor=tk.W)
        self.header.pack(fill=tk.X)
        self.chat = scrolledtext.ScrolledText(root, width=90, height=28, wrap=tk.WORD)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("user", foreground="#1a73e8", justify=tk.RIGHT)
        self.chat.tag_config("text", foreground="#202124")
        self.chat.tag_config("bold", font=("TkDefaultFont", 10, "bold"))
        self.chat.tag_config("heading", font=("TkDefaultFont", 16, "bold"), spacing1=8, spacing3=8)
        self.chat.tag_config("code", font=("TkFixedFont", 10), background="#18181b", foreground="#f4f4f5")
        self.chat.tag_config("lang", font=("TkFixedFont", 8), foreground="#5f6368")
        self.chat.tag_config("error", foreground="#d93025")
        rt_in = tk.Frame(root)
        rt_in.pack(fill=tk.X)
        self.entry = tk.Entry(rt_in)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.send_btn = tk.Button(rt_in, text="Enviar", command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)
        self.copy_btn = tk.Button(rt_in, text="Copiar código", command=self.on_copy_code, state=tk.DISABLED)
        self.copy_btn.pack(side=tk.LEFT)
        self.status = tk.Label(root, text="Listo", anchor=tk.W)
        self.status.pack(fill=tk.X)

    def on_send(self):
        if self.sending:
            return
        text = self.entry.get()
        if not text.strip():
            return
        self.sending = True
        self.send_btn.config(state=tk.DISABLED)
        self.entry.delete(0, tk.END)
        self.status.config(text="Generando...")
        self.insert_turn(RenderedTurn(role="user", text=text))

        def worker():
            try:
                entry = self.session.submit(text)
                self.root.after(0, lambda: self.on_response(entry, None))
            except Exception as e:
                self.root.after(0, lambda err=e: self.on_response(None, err))
        threading.Thread(target=worker, daemon=True).start()

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_response(self, entry, err):
        if err:
            if isinstance(err, BusinessError):
                text = f"Error: {err.message} ({err.code})\n"
            else:
                text = f"Error: {err}\n"
            self.chat.insert(tk.END, text, "error")
            self.status.config(text="Error")
        elif entry is not None:
            self.insert_turn(render_turn(entry))
            self.status.config(text=f"{len(self.session.log)} mensajes")
        self.chat.see(tk.END)
        self.sending = False
        self.send_btn.config(state=tk.NORMAL)

    def insert_turn(self, turn: RenderedTurn):
        if turn.role == "user":
            self.chat.insert(tk.END, f"{turn.text}\n\n", "user")
            return
        for run in segment_runs(turn.segments or []):
            if run.style == "code":
                self.chat.insert(tk.END, f"\n{run.language}\n", "lang")
                self.chat.insert(tk.END, f"{run.text}\n", "code")
            elif run.style == "heading":
                self.chat.insert(tk.END, f"{run.text}\n", "heading")
            else:
                self.chat.insert(tk.END, run.text, run.style)
        self.chat.insert(tk.END, "\n\n")
        code = last_code_block(turn.segments or [])
        if code is not None:
            self.last_code = code
            self.copy_btn.config(state=tk.NORMAL)

    def on_copy_code(self):
        if self.last_code is None:
            return
        self.root.clipboard_clear()
        self.root.clipboard_append(self.last_code.content)
        self.status.config(text="Copiado")
        self.root.after(2000, lambda: self.status.config(text="Listo"))


def main(identity: Optional[Identity] = None):
    root = tk.Tk()
    App(root, get_default_session(), identity)
    root.mainloop()


if __name__ == "__main__":
    main()
