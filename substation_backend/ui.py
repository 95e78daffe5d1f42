# substation_backend/ui.py
from html import escape


def render_dashboard(title: str) -> str:
    return DASHBOARD_HTML.replace("__TITLE__", escape(title))


DASHBOARD_HTML = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>__TITLE__</title>
  <style>
    :root { --bg: #f9fafb; --panel: #ffffff; --ink: #111827; --muted: #6b7280;
            --line: #e5e7eb; --accent: #2563eb; --ok: #16a34a; --warn: #dc2626; }
    * { box-sizing: border-box; }
    body { margin: 0; font-family: system-ui, sans-serif; background: var(--bg); color: var(--ink); }
    .wrap { max-width: 1100px; margin: 24px auto; padding: 0 16px; display: grid; gap: 16px; }
    .card { background: var(--panel); border: 1px solid var(--line); border-radius: 12px; padding: 16px; }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; }
    .muted { color: var(--muted); }
    .banner { border-left: 4px solid var(--warn); }
    .hidden { display: none; }
    button { background: var(--accent); color: white; border: 0; border-radius: 8px; padding: 8px 14px; cursor: pointer; }
    button:disabled { background: #9ca3af; cursor: not-allowed; }
    button.secondary { background: white; color: var(--ink); border: 1px solid var(--line); }
    ul.checklist { list-style: none; padding: 0; margin: 0; }
    ul.checklist li { padding: 4px 0; }
    .phase { margin-top: 8px; font-weight: 600; text-transform: capitalize; }
    .bar { height: 8px; background: var(--line); border-radius: 4px; overflow: hidden; }
    .bar > div { height: 100%; background: var(--ok); }
    textarea, input[type=text] { width: 100%; padding: 8px; border: 1px solid var(--line); border-radius: 8px; }
    pre { white-space: pre-wrap; background: #f3f4f6; padding: 12px; border-radius: 8px; }
    .chat { max-height: 320px; overflow-y: auto; display: grid; gap: 8px; }
    .msg { padding: 8px 10px; border-radius: 8px; }
    .msg ul { margin: 4px 0; padding-left: 20px; }
    .msg .time { color: var(--muted); font-size: 0.75rem; margin-left: 6px; }
    dl.facts { display: grid; grid-template-columns: auto 1fr; gap: 4px 12px; margin: 0; }
    dl.facts dt { color: var(--muted); }
    dl.facts dd { margin: 0; font-weight: 600; }
    .badge { display: inline-block; padding: 0 8px; border-radius: 999px; font-size: 0.75rem; margin-left: 6px; background: var(--line); }
    .badge.High { background: #fee2e2; color: var(--warn); }
    .badge.Medium { background: #fef3c7; color: #92400e; }
    .badge.Low { background: #dcfce7; color: var(--ok); }
    .msg.technician { background: #dbeafe; justify-self: end; }
    .msg.assistant { background: #f3f4f6; justify-self: start; }
    #fatal { text-align: center; font-size: 1.25rem; padding: 80px 16px; }
  </style>
</head>
<body>
  <div id="fatal" class="hidden"></div>
  <div id="app" class="wrap hidden">
    <header>
      <h1>Electrical Substation Maintenance AI Assistant</h1>
      <p class="muted">Intelligent assistance for electrical engineers in substation fault diagnosis and maintenance</p>
    </header>

    <section id="notification" class="card banner hidden">
      <strong>New fault alert</strong>
      <p id="incoming-message"></p>
      <p class="muted" id="incoming-time"></p>
      <button id="start-btn">Start maintenance task</button>
    </section>

    <section id="task" class="card hidden">
      <h2 id="task-title"></h2>
      <p id="task-message"></p>
      <p>Duration: <strong id="duration">00:00:00</strong> &middot; Phase: <span id="phase"></span></p>
      <button id="complete-btn">Complete task</button>
      <button id="end-btn" class="secondary">End task</button>
    </section>

    <div id="preparation" class="grid hidden">
      <section class="card">
        <h3>Substation Information</h3>
        <dl class="facts" id="station-info"></dl>
      </section>
      <section class="card">
        <h3>Weather Conditions</h3>
        <dl class="facts" id="weather-info"></dl>
        <p><strong>Recommendation:</strong> <span id="weather-suggestion"></span></p>
      </section>
      <section class="card">
        <h3>Recommended Tools</h3>
        <ol id="tools-list"></ol>
      </section>
      <section class="card">
        <h3>Potential Replacement Parts</h3>
        <ul class="checklist" id="parts-list"></ul>
      </section>
    </div>

    <div id="task-panels" class="grid hidden">
      <section class="card">
        <h3>Maintenance Checklist</h3>
        <p class="muted" id="maintenance-count"></p>
        <div class="bar"><div id="maintenance-bar" style="width:0%"></div></div>
        <div id="maintenance-list"></div>
      </section>
      <section class="card">
        <h3>Equipment Inspection Checklist</h3>
        <p class="muted" id="inspection-count"></p>
        <div class="bar"><div id="inspection-bar" style="width:0%"></div></div>
        <div id="inspection-list"></div>
        <button id="inspection-submit">Submit checklist</button>
        <button id="inspection-reset" class="secondary">Reset checklist</button>
      </section>
    </div>

    <section id="report-panel" class="card hidden">
      <h3>Maintenance Report</h3>
      <label>Maintenance result<textarea id="result" rows="2"></textarea></label>
      <label>Additional notes<textarea id="notes" rows="2"></textarea></label>
      <p>
        <button id="report-btn">Generate report</button>
        <a id="pdf-link" class="hidden" href="task/report/pdf"><button class="secondary" type="button">Export PDF</button></a>
      </p>
      <pre id="report" class="hidden"></pre>
    </section>

    <section class="card">
      <h3>AI Assistant</h3>
      <div class="chat" id="chat"></div>
      <form id="chat-form">
        <input type="text" id="chat-input" placeholder="Describe the issue you are seeing...">
      </form>
    </section>
  </div>

  <script>
    const $ = (id) => document.getElementById(id);
    let timer = null;

    async function api(method, path, body) {
      const options = { method, headers: { "Content-Type": "application/json" } };
      if (body !== undefined) options.body = JSON.stringify(body);
      const response = await fetch(path, options);
      const data = await response.json().catch(() => ({}));
      if (!response.ok) {
        const error = new Error(data.detail || response.statusText);
        error.status = response.status;
        throw error;
      }
      return data;
    }

    function fatal(message) {
      $("app").classList.add("hidden");
      $("fatal").textContent = message;
      $("fatal").classList.remove("hidden");
    }

    function escapeHtml(text) {
      return text.replace(/&/g, "&amp;").replace(/</g, "&lt;").replace(/>/g, "&gt;");
    }

    // Bold, bullet lists and line breaks are enough for assistant replies
    function renderMarkup(text) {
      const out = [];
      let bullets = null;
      for (const raw of escapeHtml(text).split("\n")) {
        const line = raw.replace(/\*\*(.+?)\*\*/g, "<strong>$1</strong>");
        const bullet = line.match(/^\s*[-*]\s+(.*)$/);
        if (bullet) {
          bullets = bullets || [];
          bullets.push("<li>" + bullet[1] + "</li>");
          continue;
        }
        if (bullets) {
          out.push("<ul>" + bullets.join("") + "</ul>");
          bullets = null;
        }
        out.push(line + "<br>");
      }
      if (bullets) out.push("<ul>" + bullets.join("") + "</ul>");
      return out.join("");
    }

    function renderFacts(container, pairs) {
      container.innerHTML = "";
      for (const [label, value] of pairs) {
        const dt = document.createElement("dt");
        dt.textContent = label;
        const dd = document.createElement("dd");
        dd.textContent = value;
        container.append(dt, dd);
      }
    }

    function renderPreparation(alert) {
      const station = alert.stationInfo;
      renderFacts($("station-info"), [
        ["Station Number", station.number],
        ["Voltage Level", station.voltage],
        ["Commission Date", station.commissionDate],
        ["Load Capacity", station.capacity],
        ["Location", station.location],
        ["Status", station.status],
      ]);
      const weather = alert.weather;
      renderFacts($("weather-info"), [
        ["Temperature", weather.temperature],
        ["Wind", weather.wind],
        ["Visibility", weather.visibility],
        ["Conditions", weather.condition],
      ]);
      $("weather-suggestion").textContent = weather.suggestion;

      $("tools-list").innerHTML = "";
      for (const tool of alert.tools) {
        const li = document.createElement("li");
        li.textContent = tool;
        $("tools-list").appendChild(li);
      }

      $("parts-list").innerHTML = "";
      for (const part of alert.parts) {
        const li = document.createElement("li");
        const badge = document.createElement("span");
        badge.className = "badge " + part.priority;
        badge.textContent = part.priority;
        li.append(part.name + " (" + part.stock + ")", badge);
        $("parts-list").appendChild(li);
      }
    }

    // groups: [[heading or null, items], ...]
    function renderChecklist(container, groups, onToggle) {
      container.innerHTML = "";
      for (const [heading, items] of groups) {
        if (heading) {
          const title = document.createElement("div");
          title.className = "phase";
          title.textContent = heading;
          container.appendChild(title);
        }
        const list = document.createElement("ul");
        list.className = "checklist";
        for (const item of items) {
          const li = document.createElement("li");
          const label = document.createElement("label");
          const box = document.createElement("input");
          box.type = "checkbox";
          box.checked = item.checked;
          box.addEventListener("change", () => onToggle(item.id));
          label.append(box, " ", item.label);
          li.appendChild(label);
          list.appendChild(li);
        }
        container.appendChild(list);
      }
    }

    async function refreshIncoming() {
      try {
        const alert = await api("GET", "task/incoming");
        $("incoming-message").textContent = alert.message;
        $("incoming-time").textContent = alert.time;
        $("notification").classList.remove("hidden");
      } catch (error) {
        $("notification").classList.add("hidden");
      }
    }

    function render(state) {
      const started = state.is_task_started;
      $("task").classList.toggle("hidden", !started);
      $("task-panels").classList.toggle("hidden", !started);
      $("preparation").classList.toggle("hidden", !started);
      $("report-panel").classList.toggle("hidden", !state.is_task_completed);
      $("notification").classList.toggle("hidden", started);
      if (!started) {
        clearInterval(timer);
        timer = null;
        return refreshIncoming();
      }

      const alert = state.alert;
      $("task-title").textContent = "Substation #" + alert.stationInfo.number + " (" + alert.stationInfo.status + ")";
      $("task-message").textContent = alert.message;
      renderPreparation(alert);
      $("duration").textContent = state.duration;
      $("phase").textContent = state.phase.replaceAll("_", " ");

      const mc = state.maintenance_checklist;
      $("maintenance-count").textContent = mc.completed + " / " + mc.total + " items completed";
      $("maintenance-bar").style.width = (mc.total ? (mc.completed / mc.total) * 100 : 0) + "%";
      renderChecklist($("maintenance-list"), Object.entries(mc.phases), toggleMaintenance);
      $("complete-btn").disabled = !mc.all_completed || state.is_task_completed;

      const ic = state.inspection_checklist;
      const done = ic.items.filter((i) => i.checked).length;
      $("inspection-count").textContent = ic.submitted
        ? "Inspection checklist submitted"
        : done + " of " + ic.items.length + " items checked";
      $("inspection-bar").style.width = ic.progress + "%";
      renderChecklist($("inspection-list"), [[null, ic.submitted ? [] : ic.items]], toggleInspection);
      $("inspection-submit").disabled = ic.submitted || ic.progress < 100;

      $("report").classList.toggle("hidden", !state.report);
      $("report").textContent = state.report || "";
      $("pdf-link").classList.toggle("hidden", !state.report);

      if (!state.is_task_completed && !timer) {
        timer = setInterval(async () => {
          const latest = await api("GET", "task");
          $("duration").textContent = latest.duration;
        }, 1000);
      }
      if (state.is_task_completed && timer) {
        clearInterval(timer);
        timer = null;
      }
    }

    async function reload() { render(await api("GET", "task")); }

    async function run(action) {
      try { await action(); } catch (error) { window.alert(error.message); }
      await reload();
    }

    const toggleMaintenance = (id) => run(() => api("POST", "task/checklist/" + id + "/toggle"));
    const toggleInspection = (id) => run(() => api("POST", "task/inspection/" + id + "/toggle"));

    $("start-btn").addEventListener("click", () => {
      $("start-btn").disabled = true;
      run(() => api("POST", "task/start")).finally(() => { $("start-btn").disabled = false; });
    });
    $("complete-btn").addEventListener("click", () => run(() => api("POST", "task/complete")));
    $("end-btn").addEventListener("click", () => run(() => api("POST", "task/end")));
    $("inspection-submit").addEventListener("click", () => run(() => api("POST", "task/inspection/submit")));
    $("inspection-reset").addEventListener("click", () => run(() => api("POST", "task/inspection/reset")));
    $("report-btn").addEventListener("click", () => run(async () => {
      await api("PUT", "task/outcome", { result: $("result").value, notes: $("notes").value });
      await api("POST", "task/report");
    }));

    function appendMessages(messages) {
      for (const msg of messages) {
        const div = document.createElement("div");
        div.className = "msg " + msg.role;
        if (msg.role === "assistant") {
          div.innerHTML = renderMarkup(msg.message);
        } else {
          div.textContent = msg.message;
        }
        if (msg.timestamp) {
          const time = document.createElement("span");
          time.className = "time";
          time.textContent = msg.timestamp;
          div.appendChild(time);
        }
        $("chat").appendChild(div);
      }
      $("chat").scrollTop = $("chat").scrollHeight;
    }

    $("chat-form").addEventListener("submit", async (event) => {
      event.preventDefault();
      const text = $("chat-input").value;
      if (!text.trim()) return;
      $("chat-input").value = "";
      appendMessages([{ role: "technician", message: text, timestamp: "now" }]);
      try {
        const data = await api("POST", "chat", { message: text });
        appendMessages(data.messages.slice(1));
      } catch (error) {
        appendMessages([{ role: "assistant", message: "Error: " + error.message, timestamp: "" }]);
      }
    });

    async function boot() {
      // Goes through the same alert source as task start; 404 only means none are queued
      try {
        await api("GET", "task/incoming");
      } catch (error) {
        if (error.status !== 404) return fatal("Error loading alerts: " + error.message);
      }
      $("app").classList.remove("hidden");
      const transcript = await api("GET", "chat");
      appendMessages(transcript.messages);
      await reload();
    }

    boot();
  </script>
</body>
</html>
"""
